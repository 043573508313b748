# SPDX-License-Identifier: MIT
"""Build binaries and their compile tasks.

A CppBinary is one compilable variant of a component (e.g., "mainDebug").
It owns a base compile configuration carrying its platform attributes,
an implementation bucket for dependency declarations, and a CompileTask.

CompileTask arguments may be supplied lazily: providers registered with
``compiler_args.add_provider()`` are only called when the arguments or the
cache key are requested, so nothing is resolved for tasks that never run.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from sysinc.core.attributes import USAGE_ATTRIBUTE, AttributeSet, Usage
from sysinc.core.inputs import TaskInputs
from sysinc.core.naming import (
    DEFAULT_COMPONENT,
    DEFAULT_LANGUAGE,
    UnitName,
    compile_configuration_name,
    compile_task_name,
    implementation_name,
)

if TYPE_CHECKING:
    from sysinc.core.configuration import Configuration
    from sysinc.core.project import Project
    from sysinc.tools.toolchain import Toolchain

logger = logging.getLogger(__name__)

ArgProvider = Callable[[], Iterable[str]]


class CompilerArgs:
    """Ordered compiler arguments: static tokens and lazy providers.

    Example:
        args = CompilerArgs()
        args.add("-O2")
        args.add_provider(lambda: ["-I", "include"])
        args.resolve()  # ["-O2", "-I", "include"]
    """

    def __init__(self) -> None:
        self._parts: list[list[str] | ArgProvider] = []

    def add(self, arg: str) -> CompilerArgs:
        return self.add_all([arg])

    def add_all(self, args: Iterable[str]) -> CompilerArgs:
        self._parts.append(list(args))
        return self

    def add_provider(self, provider: ArgProvider) -> CompilerArgs:
        """Append arguments computed when the list is resolved."""
        self._parts.append(provider)
        return self

    def resolve(self) -> list[str]:
        """Evaluate every provider and return the full argument list."""
        result: list[str] = []
        for part in self._parts:
            if callable(part):
                result.extend(part())
            else:
                result.extend(part)
        return result

    def __len__(self) -> int:
        return len(self._parts)


class CompileTask:
    """The compile step of a binary.

    Attributes:
        name: Task name (e.g., "compileDebugCpp").
        toolchain: Toolchain the task compiles with.
        object_file_dir: Private output directory for object files.
        inputs: Registered input file sets.
        compiler_args: Extra compiler arguments.
    """

    def __init__(
        self,
        name: str,
        toolchain: Toolchain,
        object_file_dir: Path | str,
    ) -> None:
        self.name = name
        self.toolchain = toolchain
        self.object_file_dir = Path(object_file_dir)
        self.inputs = TaskInputs()
        self.compiler_args = CompilerArgs()

    def cache_key(self) -> str:
        """Hash of everything that decides whether the task is up to date."""
        h = hashlib.sha256()
        h.update(self.toolchain.name.encode())
        for arg in self.compiler_args.resolve():
            h.update(b"\0arg:")
            h.update(arg.encode())
        for fingerprint in self.inputs.fingerprints():
            h.update(b"\0input:")
            h.update(fingerprint.encode())
        return h.hexdigest()

    def __repr__(self) -> str:
        return f"CompileTask({self.name!r}, toolchain={self.toolchain.name!r})"


class CppBinary:
    """One compilable variant of a C++ component.

    Binaries are created by ``Project.Binary()``, which also creates the
    configurations and the compile task they reference.

    Attributes:
        name: Binary name (e.g., "mainDebug").
        project: Owning project.
        unit: Structured name (component, variant).
        language: Source language used in generated names.
        compile_configuration: Base compile configuration.
        implementation: Implementation dependency bucket.
        compile_task: The binary's compile task.
        outgoing: Configurations re-exposed to dependent projects.
    """

    def __init__(
        self,
        name: str,
        project: Project,
        toolchain: Toolchain,
        attributes: AttributeSet,
        *,
        component: str = DEFAULT_COMPONENT,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.name = name
        self.project = project
        self.unit = UnitName.parse(name, component)
        self.language = language

        graph = project.configurations
        self.compile_configuration: Configuration = graph.create(
            compile_configuration_name(self.variant_name, language),
            can_be_resolved=True,
            attributes=AttributeSet.of(
                (USAGE_ATTRIBUTE, Usage.named(Usage.C_PLUS_PLUS_API))
            ).merge(attributes),
            description=f"Header dependencies for binary '{name}'.",
        )
        self.implementation: Configuration = graph.create(
            implementation_name(self.unit),
            extends_from=[project.implementation],
            description=f"Implementation only dependencies for binary '{name}'.",
        )
        self.compile_configuration.extend(self.implementation)

        self.compile_task = project.tasks.register(
            CompileTask(
                compile_task_name(self.variant_name, language),
                toolchain,
                project.build_dir / "obj" / self.unit.component / self.variant_name,
            )
        )
        self.outgoing: dict[str, Configuration] = {}

    @property
    def variant_name(self) -> str:
        return self.unit.variant

    @property
    def toolchain(self) -> Toolchain:
        return self.compile_task.toolchain

    def __repr__(self) -> str:
        return f"CppBinary({self.name!r}, project={self.project.name!r})"
