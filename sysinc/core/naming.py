# SPDX-License-Identifier: MIT
"""Name derivation for binaries, configurations and tasks.

The generated names are shared with other projects that depend on a
binary, so they must be reproduced exactly:

    binary "mainDebug"  -> variant "debug"
    variant "debug"     -> "debugSystemHeaders", "debugSystemHeadersElements",
                           "debugSystemVersions", "debugSystemVersionsElements"
                           task "compileDebugCpp"
                           base compile configuration "cppCompileDebug"
                           implementation bucket "mainDebugImplementation"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from sysinc.core.errors import ConfigurationError

if TYPE_CHECKING:
    from sysinc.core.configuration import ConfigurationRole

DEFAULT_COMPONENT = "main"
DEFAULT_LANGUAGE = "cpp"


def capitalize(s: str) -> str:
    """Upper-case the first character only ("debug" -> "Debug")."""
    return s[:1].upper() + s[1:]


def uncapitalize(s: str) -> str:
    """Lower-case the first character only ("Debug" -> "debug")."""
    return s[:1].lower() + s[1:]


class UnitName(NamedTuple):
    """Structured name of a build unit.

    Attributes:
        component: Component the unit belongs to (e.g., "main").
        variant: Variant name (e.g., "debug").
    """

    component: str
    variant: str

    @classmethod
    def parse(cls, binary_name: str, component: str = DEFAULT_COMPONENT) -> UnitName:
        """Split a binary name into component and variant.

        The component prefix is only stripped when present; a binary named
        "release" has the variant "release".

        Raises:
            ConfigurationError: If no variant is left (e.g., "main").
        """
        variant = binary_name
        if binary_name.startswith(component):
            variant = binary_name[len(component) :]
        if not variant:
            raise ConfigurationError(
                f"binary name '{binary_name}' has no variant after '{component}'"
            )
        return cls(component, uncapitalize(variant))


def variant_name(binary_name: str, component: str = DEFAULT_COMPONENT) -> str:
    """Variant name of a binary ("mainDebug" -> "debug")."""
    return UnitName.parse(binary_name, component).variant


def configuration_name(variant: str, role: ConfigurationRole) -> str:
    """Name of a system configuration ("debug", headers -> "debugSystemHeaders")."""
    return variant + role.suffix


def compile_task_name(variant: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Name of a binary's compile task ("debug" -> "compileDebugCpp")."""
    return f"compile{capitalize(variant)}{capitalize(language)}"


def compile_configuration_name(variant: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Name of a binary's base compile configuration ("cppCompileDebug")."""
    return f"{language}Compile{capitalize(variant)}"


def implementation_name(unit: UnitName) -> str:
    """Name of a binary's implementation bucket ("mainDebugImplementation")."""
    return f"{unit.component}{capitalize(unit.variant)}Implementation"
