# SPDX-License-Identifier: MIT
"""Configuration factory for system headers and versions.

For each build unit the factory derives four configurations from the
unit's base compile configuration:

    <variant>SystemHeaders            resolvable, usage=cplusplus-system-api
    <variant>SystemHeadersElements    consumable, usage=cplusplus-system-api
    <variant>SystemVersions           resolvable, usage=cplusplus-system-api-version
    <variant>SystemVersionsElements   consumable, usage=cplusplus-system-api-version

All four copy the base compile attributes except usage, so resolution only
selects artifacts built for the same platform and build type, and all four
extend the unit's implementation bucket, so a dependency declared once in
implementation scope is seen by every one of them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple, Protocol

from sysinc.core.attributes import USAGE_ATTRIBUTE, AttributeSet
from sysinc.core.configuration import Configuration, ConfigurationRole
from sysinc.core.errors import NameCollisionError
from sysinc.core.naming import configuration_name

if TYPE_CHECKING:
    from sysinc.core.configuration import ConfigurationGraph

logger = logging.getLogger(__name__)


class BuildUnit(Protocol):
    """What the factory needs to know about a build unit."""

    @property
    def name(self) -> str: ...

    @property
    def variant_name(self) -> str: ...

    @property
    def compile_configuration(self) -> Configuration: ...

    @property
    def implementation(self) -> Configuration: ...


class SystemConfigurations(NamedTuple):
    """The four system configurations of one build unit."""

    resolvable_headers: Configuration
    consumable_headers: Configuration
    resolvable_versions: Configuration
    consumable_versions: Configuration

    def consumable(self) -> list[Configuration]:
        return [self.consumable_headers, self.consumable_versions]


def system_attributes(base: AttributeSet, role: ConfigurationRole) -> AttributeSet:
    """Attributes for a node of ``role`` derived from ``base``.

    The base usage is dropped before the sentinel is set.
    """
    platform = base.filter(lambda key, _value: key.type is not USAGE_ATTRIBUTE.type)
    return AttributeSet.of((USAGE_ATTRIBUTE, role.usage)).merge(platform)


class ConfigurationFactory:
    """Creates the system configurations of build units in a graph.

    Example:
        factory = ConfigurationFactory(project.configurations)
        configs = factory.create_configuration_set(binary)
        configs.resolvable_headers.name  # "debugSystemHeaders"
    """

    def __init__(self, graph: ConfigurationGraph) -> None:
        self.graph = graph

    def create(self, unit: BuildUnit, role: ConfigurationRole) -> Configuration:
        """Create the configuration of ``role`` for ``unit``.

        Raises:
            NameCollisionError: If the configuration already exists.
        """
        return self.graph.create(
            configuration_name(unit.variant_name, role),
            role=role,
            attributes=system_attributes(unit.compile_configuration.attributes, role),
            extends_from=[unit.implementation],
            description=f"{role.label} dependencies for binary '{unit.name}'.",
        )

    def create_configuration_set(self, unit: BuildUnit) -> SystemConfigurations:
        """Create all four system configurations for ``unit``.

        Either all four are created or, if any name is taken, none.
        """
        for role in ConfigurationRole:
            name = configuration_name(unit.variant_name, role)
            if name in self.graph:
                raise NameCollisionError(name)

        configs = SystemConfigurations(
            resolvable_headers=self.create(unit, ConfigurationRole.RESOLVABLE_HEADERS),
            consumable_headers=self.create(unit, ConfigurationRole.CONSUMABLE_HEADERS),
            resolvable_versions=self.create(
                unit, ConfigurationRole.RESOLVABLE_VERSIONS
            ),
            consumable_versions=self.create(
                unit, ConfigurationRole.CONSUMABLE_VERSIONS
            ),
        )
        logger.debug(
            "Created system configurations for %s: %s",
            unit.name,
            ", ".join(c.name for c in configs),
        )
        return configs
