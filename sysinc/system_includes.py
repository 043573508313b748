# SPDX-License-Identifier: MIT
"""Wire system headers into every binary of a project.

For each binary, in discovery order:

1. create its four system configurations;
2. register the resolved version markers as a content-only input of the
   compile task, and append a lazily computed list of include flags for
   the resolved header directories to its compiler arguments;
3. re-expose the consumable configurations to dependent projects.

The header directories themselves never become task inputs: the compiler
flags carry them (relative to the object directory) and the version
markers carry the invalidation signal. The content of a project's version
marker must therefore change whenever its headers change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sysinc.configure.config import SystemIncludesConfig
from sysinc.core.factory import ConfigurationFactory, SystemConfigurations
from sysinc.core.flags import include_flags
from sysinc.core.inputs import PathSensitivity
from sysinc.core.naming import compile_task_name

if TYPE_CHECKING:
    from sysinc.core.project import Project
    from sysinc.core.target import CppBinary

logger = logging.getLogger(__name__)


class SystemIncludes:
    """Applies system header wiring to projects.

    Example:
        project = Project("app")
        SystemIncludes().apply(project)
        project.Binary("mainDebug", GccToolchain(), debuggable=True)
        project.tasks.named("compileDebugCpp").compiler_args.resolve()
    """

    def __init__(self, config: SystemIncludesConfig | None = None) -> None:
        """Create the wiring; without ``config`` it is read from build variables."""
        if config is None:
            config = SystemIncludesConfig.from_vars()
        self.config = config

    def apply(self, project: Project) -> None:
        """Wire every current and future binary of ``project``."""
        project.binaries.configure_each(lambda binary: self.wire(project, binary))

    def wire(self, project: Project, binary: CppBinary) -> SystemConfigurations:
        """Wire a single binary and return its system configurations."""
        configs = ConfigurationFactory(project.configurations).create_configuration_set(
            binary
        )
        resolver = project.resolver
        task = project.tasks.named(
            compile_task_name(binary.variant_name, binary.language)
        )

        task.inputs.files(
            lambda: resolver.resolve(configs.resolvable_versions),
            sensitivity=PathSensitivity.NONE,
        )

        relativize = self.config.relativize

        def _flags() -> list[str]:
            return include_flags(
                task.toolchain,
                resolver.resolve(configs.resolvable_headers),
                task.object_file_dir if relativize else None,
            )

        task.compiler_args.add_provider(_flags)

        for config in configs.consumable():
            binary.outgoing[config.name] = config

        logger.info(
            "Wired system includes into %s:%s (%s)",
            project.name,
            task.name,
            ", ".join(c.name for c in configs),
        )
        return configs
