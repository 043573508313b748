# SPDX-License-Identifier: MIT
"""Typed attributes used to classify and match configurations.

An Attribute is a typed key (name + value type). Values of named types
(Usage, OperatingSystemFamily, MachineArchitecture) are interned, so two
values with the same name are the same object. An AttributeSet is an
immutable mapping from keys to values; every operation returns a new set.

Two sets are compatible when every key present in both maps to equal
values. There are no compatibility rules or coercions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T")
N = TypeVar("N", bound="Named")


@dataclass(frozen=True)
class Attribute(Generic[T]):
    """A typed, named attribute key.

    Attributes:
        name: Attribute name (e.g., "usage").
        type: Type every value of this attribute must have.
    """

    name: str
    type: type[T]

    def __str__(self) -> str:
        return self.name


class Named:
    """Base class for interned, named attribute values.

    Use ``SomeNamed.named("value")`` rather than the constructor so that
    equal names yield the identical object.
    """

    _interned: ClassVar[dict[tuple[type, str], Named]] = {}

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError(f"{type(self).__name__} name must not be empty")
        self.name = name

    @classmethod
    def named(cls: type[N], name: str) -> N:
        """Return the interned value of this type with the given name."""
        key = (cls, name)
        value = Named._interned.get(key)
        if value is None:
            value = cls(name)
            Named._interned[key] = value
        return value  # type: ignore[return-value]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Named):
            return NotImplemented
        return type(self) is type(other) and self.name == other.name

    def __hash__(self) -> int:
        return hash((type(self), self.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def __str__(self) -> str:
        return self.name


class Usage(Named):
    """What a configuration's artifacts are used for."""

    __slots__ = ()

    C_PLUS_PLUS_API: ClassVar[str] = "cplusplus-api"
    SYSTEM_API: ClassVar[str] = "cplusplus-system-api"
    SYSTEM_API_VERSION: ClassVar[str] = "cplusplus-system-api-version"


class OperatingSystemFamily(Named):
    """Target operating system family (linux, macos, windows)."""

    __slots__ = ()


class MachineArchitecture(Named):
    """Target machine architecture (x86-64, aarch64, ...)."""

    __slots__ = ()


USAGE_ATTRIBUTE: Attribute[Usage] = Attribute("usage", Usage)
DEBUGGABLE_ATTRIBUTE: Attribute[bool] = Attribute("native.debuggable", bool)
OPTIMIZED_ATTRIBUTE: Attribute[bool] = Attribute("native.optimized", bool)
OPERATING_SYSTEM_ATTRIBUTE: Attribute[OperatingSystemFamily] = Attribute(
    "native.operatingSystem", OperatingSystemFamily
)
ARCHITECTURE_ATTRIBUTE: Attribute[MachineArchitecture] = Attribute(
    "native.architecture", MachineArchitecture
)


class AttributeSet(Mapping[Attribute[Any], Any]):
    """Immutable mapping of attribute keys to values.

    Iteration order is insertion order, but equality and compatibility
    ignore order.

    Example:
        attrs = AttributeSet.of(
            (USAGE_ATTRIBUTE, Usage.named(Usage.C_PLUS_PLUS_API)),
            (DEBUGGABLE_ATTRIBUTE, True),
        )
        platform = attrs.without(USAGE_ATTRIBUTE)
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[Attribute[Any], Any] | None = None) -> None:
        self._entries: dict[Attribute[Any], Any] = {}
        if entries:
            for key, value in entries.items():
                self._entries[key] = _checked(key, value)

    @classmethod
    def of(cls, *pairs: tuple[Attribute[Any], Any]) -> AttributeSet:
        """Create a set from (key, value) pairs."""
        return cls(dict(pairs))

    def __getitem__(self, key: Attribute[Any]) -> Any:
        return self._entries[key]

    def __iter__(self) -> Iterator[Attribute[Any]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def with_attribute(self, key: Attribute[T], value: T) -> AttributeSet:
        """Return a copy with ``key`` set to ``value``."""
        entries = dict(self._entries)
        entries[key] = value
        return AttributeSet(entries)

    def without(self, key: Attribute[Any]) -> AttributeSet:
        """Return a copy without ``key``."""
        return self.filter(lambda k, _v: k != key)

    def filter(self, predicate: Callable[[Attribute[Any], Any], bool]) -> AttributeSet:
        """Return the entries for which ``predicate(key, value)`` is true."""
        return AttributeSet(
            {k: v for k, v in self._entries.items() if predicate(k, v)}
        )

    def merge(self, other: Mapping[Attribute[Any], Any]) -> AttributeSet:
        """Return the union of both sets; values from ``other`` win."""
        entries = dict(self._entries)
        entries.update(other)
        return AttributeSet(entries)

    def is_compatible_with(self, other: Mapping[Attribute[Any], Any]) -> bool:
        """True if every key present in both sets has equal values."""
        for key, value in self._entries.items():
            if key in other and other[key] != value:
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeSet):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        items = ", ".join(f"{k.name}={v}" for k, v in self._entries.items())
        return f"AttributeSet({items})"


def _checked(key: Attribute[Any], value: Any) -> Any:
    if not isinstance(value, key.type):
        raise TypeError(
            f"attribute '{key.name}' expects {key.type.__name__}, "
            f"got {type(value).__name__}"
        )
    return value
