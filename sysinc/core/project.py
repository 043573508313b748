# SPDX-License-Identifier: MIT
"""Project container for sysinc builds.

The Project holds the configuration graph, the binaries discovered for the
project and their compile tasks. Other projects depend on it through
``other.implementation.add_dependency(other.dependency(project))``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from sysinc.core.attributes import (
    ARCHITECTURE_ATTRIBUTE,
    DEBUGGABLE_ATTRIBUTE,
    OPERATING_SYSTEM_ATTRIBUTE,
    OPTIMIZED_ATTRIBUTE,
    AttributeSet,
    MachineArchitecture,
    OperatingSystemFamily,
)
from sysinc.core.configuration import (
    ConfigurationGraph,
    FileDependency,
    ProjectDependency,
)
from sysinc.core.errors import ConfigurationError
from sysinc.core.naming import DEFAULT_COMPONENT, DEFAULT_LANGUAGE
from sysinc.core.resolver import ConfigurationResolver
from sysinc.core.target import CompileTask, CppBinary

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from sysinc.tools.toolchain import Toolchain


class BinaryCollection:
    """Binaries of a project, in discovery order.

    Actions registered with ``configure_each()`` run for every binary
    already present and for every binary added later.
    """

    def __init__(self) -> None:
        self._binaries: dict[str, CppBinary] = {}
        self._actions: list[Callable[[CppBinary], object]] = []

    def add(self, binary: CppBinary) -> CppBinary:
        if binary.name in self._binaries:
            raise ConfigurationError(f"binary already exists: {binary.name}")
        self._binaries[binary.name] = binary
        for action in self._actions:
            action(binary)
        return binary

    def configure_each(self, action: Callable[[CppBinary], object]) -> None:
        self._actions.append(action)
        for binary in list(self._binaries.values()):
            action(binary)

    def named(self, name: str) -> CppBinary:
        try:
            return self._binaries[name]
        except KeyError:
            raise ConfigurationError(f"binary not found: {name}") from None

    def __iter__(self) -> Iterator[CppBinary]:
        return iter(list(self._binaries.values()))

    def __len__(self) -> int:
        return len(self._binaries)


class TaskContainer:
    """Tasks of a project, looked up by name."""

    def __init__(self) -> None:
        self._tasks: dict[str, CompileTask] = {}

    def register(self, task: CompileTask) -> CompileTask:
        if task.name in self._tasks:
            raise ConfigurationError(f"task already exists: {task.name}")
        self._tasks[task.name] = task
        return task

    def named(self, name: str) -> CompileTask:
        try:
            return self._tasks[name]
        except KeyError:
            raise ConfigurationError(f"task not found: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[CompileTask]:
        return iter(list(self._tasks.values()))


class Project:
    """Top-level container for one sysinc project.

    Example:
        system = Project("system", root_dir=root / "system")
        publish_system_headers(system, "include", "include.version")

        app = Project("app", root_dir=root / "app")
        app.implementation.add_dependency(app.dependency(system))
        SystemIncludes().apply(app)
        app.Binary("mainDebug", GccToolchain(), debuggable=True)

    Attributes:
        name: Project name.
        root_dir: Project root directory.
        build_dir: Directory for build outputs.
        configurations: The project's configuration graph.
        implementation: Project-wide implementation bucket.
        binaries: Binaries, in discovery order.
        tasks: Compile tasks.
        resolver: Resolver used to turn configurations into artifacts.
    """

    __slots__ = (
        "name",
        "root_dir",
        "build_dir",
        "configurations",
        "implementation",
        "binaries",
        "tasks",
        "resolver",
    )

    def __init__(
        self,
        name: str,
        *,
        root_dir: Path | str | None = None,
        build_dir: Path | str = "build",
    ) -> None:
        """Create a project.

        Args:
            name: Project name.
            root_dir: Project root directory (default: current dir).
            build_dir: Build output directory, relative to root_dir unless
                absolute (default: "build").
        """
        self.name = name
        self.root_dir = Path(root_dir) if root_dir else Path.cwd()
        self.build_dir = self.root_dir / build_dir
        self.configurations = ConfigurationGraph()
        self.implementation = self.configurations.create(
            "implementation",
            description="Implementation only dependencies for all binaries.",
        )
        self.binaries = BinaryCollection()
        self.tasks = TaskContainer()
        self.resolver = ConfigurationResolver()

        # Auto-register with global registry (for CLI access)
        from sysinc import _register_project

        _register_project(self)

    def Binary(
        self,
        name: str,
        toolchain: Toolchain,
        *,
        debuggable: bool = False,
        optimized: bool = False,
        operating_system: str | None = None,
        architecture: str | None = None,
        component: str = DEFAULT_COMPONENT,
        language: str = DEFAULT_LANGUAGE,
    ) -> CppBinary:
        """Create and register a binary.

        Args:
            name: Binary name (e.g., "mainDebug").
            toolchain: Toolchain the binary compiles with.
            debuggable: Whether the binary is built with debug info.
            optimized: Whether the binary is optimized.
            operating_system: Target OS family (e.g., "linux").
            architecture: Target architecture (e.g., "x86-64").
            component: Component prefix stripped from the variant name.
            language: Language used in generated names.

        Returns:
            The new binary, already passed to every configure_each action.
        """
        attributes = AttributeSet.of(
            (DEBUGGABLE_ATTRIBUTE, debuggable),
            (OPTIMIZED_ATTRIBUTE, optimized),
        )
        if operating_system:
            attributes = attributes.with_attribute(
                OPERATING_SYSTEM_ATTRIBUTE,
                OperatingSystemFamily.named(operating_system),
            )
        if architecture:
            attributes = attributes.with_attribute(
                ARCHITECTURE_ATTRIBUTE, MachineArchitecture.named(architecture)
            )

        binary = CppBinary(
            name,
            self,
            toolchain,
            attributes,
            component=component,
            language=language,
        )
        logger.debug("Discovered binary %s in project %s", name, self.name)
        return self.binaries.add(binary)

    def dependency(self, project: Project) -> ProjectDependency:
        """Dependency on another project's consumable configurations."""
        if project is self:
            raise ConfigurationError(f"project '{self.name}' cannot depend on itself")
        return ProjectDependency(project)

    def files(self, *paths: Path | str) -> FileDependency:
        """Dependency on files or directories, relative to root_dir."""
        return FileDependency(tuple(self.root_dir / p for p in paths))

    def __repr__(self) -> str:
        return f"Project({self.name!r}, root_dir={str(self.root_dir)!r})"
