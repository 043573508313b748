# SPDX-License-Identifier: MIT
"""Toolchain protocol and base implementation.

A Toolchain identifies the compiler family a compile task runs with.
The only thing sysinc needs from it is whether it understands GCC-style
include flags, and which flag to use.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Toolchain(Protocol):
    """Protocol for toolchains."""

    @property
    def name(self) -> str:
        """Toolchain name (e.g., 'gcc', 'llvm', 'msvc')."""
        ...

    @property
    def gcc_compatible(self) -> bool:
        """True if the compiler accepts GCC command-line syntax."""
        ...


class BaseToolchain:
    """Base class for toolchains.

    Subclasses set ``gcc_compatible`` and, where needed, ``include_flag``.
    """

    gcc_compatible: bool = False
    include_flag: str | None = None
    aliases: tuple[str, ...] = ()

    def __init__(self, name: str) -> None:
        """Initialize a toolchain.

        Args:
            name: Toolchain name.
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"

    def __str__(self) -> str:
        return self.name


def is_gcc_compatible(toolchain: object) -> bool:
    """Check whether ``toolchain`` takes GCC-style flags."""
    return bool(getattr(toolchain, "gcc_compatible", False))
