# SPDX-License-Identifier: MIT
"""Configuration nodes and the graph that owns them.

A Configuration is a named, attribute-tagged point in the dependency
graph. Resolvable configurations pull artifacts in by following their
dependencies; consumable configurations are what other projects' resolvable
configurations select. Plain buckets such as ``implementation`` are
neither: they only collect dependency declarations that other
configurations inherit through ``extends_from``.

The ConfigurationGraph is passed explicitly to whoever creates nodes, and
``create()`` returns the new node handle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from sysinc.core.attributes import AttributeSet, Usage
from sysinc.core.errors import NameCollisionError, UnknownConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from sysinc.core.project import Project

logger = logging.getLogger(__name__)


class ConfigurationRole(Enum):
    """Role of a system configuration node.

    Each role is either resolvable or consumable, never both.
    """

    RESOLVABLE_HEADERS = ("SystemHeaders", Usage.SYSTEM_API, False)
    CONSUMABLE_HEADERS = ("SystemHeaders", Usage.SYSTEM_API, True)
    RESOLVABLE_VERSIONS = ("SystemVersions", Usage.SYSTEM_API_VERSION, False)
    CONSUMABLE_VERSIONS = ("SystemVersions", Usage.SYSTEM_API_VERSION, True)

    def __init__(self, base_name: str, usage_name: str, consumable: bool) -> None:
        self.base_name = base_name
        self.usage_name = usage_name
        self.consumable = consumable

    @property
    def resolvable(self) -> bool:
        return not self.consumable

    @property
    def usage(self) -> Usage:
        """The usage sentinel carried by nodes of this role."""
        return Usage.named(self.usage_name)

    @property
    def suffix(self) -> str:
        """Name suffix, e.g. "SystemHeadersElements"."""
        return self.base_name + ("Elements" if self.consumable else "")

    @property
    def label(self) -> str:
        """Human readable label used in descriptions."""
        kind = "headers" if self.usage_name == Usage.SYSTEM_API else "versions"
        return f"System {kind}{' elements' if self.consumable else ''}"


@dataclass(frozen=True)
class ProjectDependency:
    """Dependency on the consumable configurations of another project."""

    project: Project

    def __str__(self) -> str:
        return f"project '{self.project.name}'"


@dataclass(frozen=True)
class FileDependency:
    """Dependency on a fixed list of files or directories."""

    paths: tuple[Path, ...]

    def __str__(self) -> str:
        return "files(" + ", ".join(str(p) for p in self.paths) + ")"


Dependency = ProjectDependency | FileDependency


class Configuration:
    """A node in the configuration graph.

    Attributes:
        name: Name, unique within its graph.
        role: System role, or None for plain buckets.
        can_be_resolved: Whether this node may be resolved to artifacts.
        can_be_consumed: Whether other projects may select this node.
        attributes: Attributes used for matching.
        extends_from: Configurations whose dependencies are inherited.
        dependencies: Dependencies declared directly on this node.
        artifacts: Outgoing artifacts (for consumable nodes).
        description: Human readable description.
    """

    __slots__ = (
        "name",
        "role",
        "can_be_resolved",
        "can_be_consumed",
        "attributes",
        "extends_from",
        "dependencies",
        "artifacts",
        "description",
    )

    def __init__(
        self,
        name: str,
        *,
        role: ConfigurationRole | None = None,
        can_be_resolved: bool = False,
        can_be_consumed: bool = False,
        attributes: AttributeSet | None = None,
        description: str | None = None,
    ) -> None:
        self.name = name
        self.role = role
        if role is not None:
            can_be_resolved = role.resolvable
            can_be_consumed = role.consumable
        self.can_be_resolved = can_be_resolved
        self.can_be_consumed = can_be_consumed
        self.attributes = attributes if attributes is not None else AttributeSet()
        self.extends_from: list[Configuration] = []
        self.dependencies: list[Dependency] = []
        self.artifacts: list[Path] = []
        self.description = description

    def extend(self, *parents: Configuration) -> Configuration:
        """Inherit the dependencies of ``parents`` (fluent API)."""
        for parent in parents:
            if parent is self:
                raise ValueError(f"configuration '{self.name}' cannot extend itself")
            if parent not in self.extends_from:
                self.extends_from.append(parent)
        return self

    def add_dependency(self, dependency: Dependency) -> Configuration:
        """Declare a dependency on this node (fluent API)."""
        if dependency not in self.dependencies:
            self.dependencies.append(dependency)
        return self

    def add_artifact(self, path: Path | str) -> Configuration:
        """Attach an outgoing artifact (fluent API)."""
        artifact = Path(path)
        if artifact not in self.artifacts:
            self.artifacts.append(artifact)
        return self

    def hierarchy(self) -> list[Configuration]:
        """This node followed by every configuration it extends, depth-first."""
        result: list[Configuration] = []

        def _walk(config: Configuration) -> None:
            if config in result:
                return
            result.append(config)
            for parent in config.extends_from:
                _walk(parent)

        _walk(self)
        return result

    def all_dependencies(self) -> list[Dependency]:
        """Own and inherited dependencies in declaration order."""
        result: list[Dependency] = []
        for config in self.hierarchy():
            for dep in config.dependencies:
                if dep not in result:
                    result.append(dep)
        return result

    def __repr__(self) -> str:
        kind = []
        if self.can_be_resolved:
            kind.append("resolvable")
        if self.can_be_consumed:
            kind.append("consumable")
        return f"Configuration({self.name!r}, {'/'.join(kind) or 'bucket'})"


class ConfigurationGraph:
    """Registry of the configurations of one project.

    Example:
        graph = ConfigurationGraph()
        impl = graph.create("implementation")
        headers = graph.create(
            "debugSystemHeaders",
            role=ConfigurationRole.RESOLVABLE_HEADERS,
            extends_from=[impl],
        )
    """

    __slots__ = ("_configurations",)

    def __init__(self) -> None:
        self._configurations: dict[str, Configuration] = {}

    def create(
        self,
        name: str,
        *,
        role: ConfigurationRole | None = None,
        can_be_resolved: bool = False,
        can_be_consumed: bool = False,
        attributes: AttributeSet | None = None,
        extends_from: Iterable[Configuration] = (),
        description: str | None = None,
    ) -> Configuration:
        """Create and register a configuration.

        Raises:
            NameCollisionError: If ``name`` is already registered.
        """
        if name in self._configurations:
            raise NameCollisionError(name)
        config = Configuration(
            name,
            role=role,
            can_be_resolved=can_be_resolved,
            can_be_consumed=can_be_consumed,
            attributes=attributes,
            description=description,
        )
        config.extend(*extends_from)
        self._configurations[name] = config
        logger.debug("Created %r with %r", config, config.attributes)
        return config

    def get(self, name: str) -> Configuration:
        """Look up a configuration by name.

        Raises:
            UnknownConfigurationError: If no such configuration exists.
        """
        try:
            return self._configurations[name]
        except KeyError:
            raise UnknownConfigurationError(name) from None

    def find(self, name: str) -> Configuration | None:
        return self._configurations.get(name)

    def consumable(self) -> list[Configuration]:
        """All consumable configurations, in creation order."""
        return [c for c in self._configurations.values() if c.can_be_consumed]

    def __contains__(self, name: object) -> bool:
        return name in self._configurations

    def __iter__(self) -> Iterator[Configuration]:
        return iter(list(self._configurations.values()))

    def __len__(self) -> int:
        return len(self._configurations)
