# SPDX-License-Identifier: MIT
"""Custom exceptions for sysinc.

All sysinc exceptions inherit from SysincError. Nothing here is expected
to fail during a normal build, so every error is raised where it occurs
and propagated to the caller unmodified.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class SysincError(Exception):
    """Base class for all sysinc exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(SysincError):
    """Error while building the configuration graph.

    Raised for programming errors in a build description, such as
    resolving a node that cannot be resolved.
    """


class NameCollisionError(ConfigurationError):
    """A configuration with the same name is already registered.

    Attributes:
        name: The colliding configuration name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"configuration already exists: {name}")


class UnknownConfigurationError(ConfigurationError):
    """Referenced configuration does not exist.

    Attributes:
        name: The name that was looked up.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"configuration not found: {name}")


class UnsupportedToolchainError(SysincError):
    """No include flag syntax is known for a toolchain.

    Attributes:
        toolchain: The offending toolchain (or its name).
    """

    def __init__(self, toolchain: object) -> None:
        self.toolchain = toolchain
        super().__init__(f"unsupported toolchain: {toolchain}")


class ResolutionError(SysincError):
    """A configuration could not be resolved to artifacts.

    Attributes:
        configuration: Name of the configuration being resolved.
    """

    def __init__(self, configuration: str, message: str) -> None:
        self.configuration = configuration
        super().__init__(f"could not resolve '{configuration}': {message}")


class UnmetDependencyError(ResolutionError):
    """No consumable configuration matches a declared dependency."""


class AmbiguousArtifactError(ResolutionError):
    """More than one consumable configuration matches a dependency.

    Attributes:
        candidates: Names of the matching configurations.
    """

    def __init__(
        self, configuration: str, dependency: str, candidates: Sequence[str]
    ) -> None:
        self.candidates = list(candidates)
        super().__init__(
            configuration,
            f"ambiguous match for {dependency}: {', '.join(self.candidates)}",
        )


class MissingInputError(SysincError):
    """A registered task input file does not exist.

    Attributes:
        path: The missing file.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"input file not found: {path}")
