# SPDX-License-Identifier: MIT
"""Attribute-matching resolution of configurations.

The ConfigurationResolver turns a resolvable configuration into the list
of artifacts it depends on:

1. Walk the configuration's own and inherited dependencies in declaration
   order.
2. A file dependency contributes its paths directly.
3. A project dependency selects the one consumable configuration of that
   project whose attributes are compatible with the requesting
   configuration and whose usage equals the requested usage. Its artifacts
   are emitted, then its own dependencies are followed with the same
   request attributes.

Results keep the first occurrence of each path, so the order only depends
on the declarations. Nothing is cached; resolving twice without changes
gives the same list.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sysinc.core.attributes import USAGE_ATTRIBUTE
from sysinc.core.configuration import FileDependency, ProjectDependency
from sysinc.core.errors import (
    AmbiguousArtifactError,
    ConfigurationError,
    UnmetDependencyError,
)

if TYPE_CHECKING:
    from sysinc.core.attributes import AttributeSet
    from sysinc.core.configuration import Configuration, Dependency

logger = logging.getLogger(__name__)


class ConfigurationResolver:
    """Resolves configurations to artifact paths.

    Example:
        resolver = ConfigurationResolver()
        include_dirs = resolver.resolve(configs.resolvable_headers)
    """

    def resolve(self, configuration: Configuration) -> list[Path]:
        """Resolve a configuration to its artifacts.

        Raises:
            ConfigurationError: If the configuration is not resolvable.
            UnmetDependencyError: If a project dependency has no match.
            AmbiguousArtifactError: If it has more than one.
        """
        if not configuration.can_be_resolved:
            raise ConfigurationError(
                f"configuration '{configuration.name}' cannot be resolved"
            )

        result: list[Path] = []
        visited: set[int] = set()
        self._resolve_dependencies(
            configuration.name,
            configuration.attributes,
            configuration.all_dependencies(),
            result,
            visited,
        )
        logger.debug(
            "Resolved %s to %d artifact(s)", configuration.name, len(result)
        )
        return result

    def select(
        self,
        requester: str,
        attributes: AttributeSet,
        dependency: ProjectDependency,
    ) -> Configuration:
        """Select the consumable configuration matching a project dependency."""
        usage = attributes.get(USAGE_ATTRIBUTE)
        candidates = [
            config
            for config in dependency.project.configurations.consumable()
            if config.attributes.get(USAGE_ATTRIBUTE) == usage
            and config.attributes.is_compatible_with(attributes)
        ]
        if not candidates:
            raise UnmetDependencyError(
                requester,
                f"no configuration of {dependency} matches {attributes!r}",
            )
        if len(candidates) > 1:
            raise AmbiguousArtifactError(
                requester, str(dependency), [c.name for c in candidates]
            )
        return candidates[0]

    def _resolve_dependencies(
        self,
        requester: str,
        attributes: AttributeSet,
        dependencies: list[Dependency],
        result: list[Path],
        visited: set[int],
    ) -> None:
        for dep in dependencies:
            if isinstance(dep, FileDependency):
                _append_unique(result, dep.paths)
            elif isinstance(dep, ProjectDependency):
                selected = self.select(requester, attributes, dep)
                if id(selected) in visited:
                    continue
                visited.add(id(selected))
                logger.debug("%s: selected %s", requester, selected.name)
                _append_unique(result, selected.artifacts)
                self._resolve_dependencies(
                    requester,
                    attributes,
                    selected.all_dependencies(),
                    result,
                    visited,
                )


def _append_unique(result: list[Path], paths: tuple[Path, ...] | list[Path]) -> None:
    for path in paths:
        if path not in result:
            result.append(path)
