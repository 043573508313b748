# SPDX-License-Identifier: MIT
"""
Sysinc: system header wiring for native build graphs.

Sysinc lets C/C++ binaries depend on separately versioned system header
trees without making every file under those trees a compile input. Header
directories reach the compiler as relativized include flags, and version
marker files are fingerprinted by content to invalidate compile results.
"""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sysinc.core.project import Project

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Build variables given to the sysinc CLI; None until first looked up
_cli_vars: dict[str, str] | None = None

# Projects created since the last CLI run, in creation order
_registered_projects: list[Project] = []


def _register_project(project: Project) -> None:
    _registered_projects.append(project)


def get_registered_projects() -> list[Project]:
    """Projects created by the build script, in creation order."""
    return list(_registered_projects)


def _clear_registered_projects() -> None:
    _registered_projects.clear()


def _set_build_vars(variables: Mapping[str, str] | None) -> None:
    """Replace the command-line build variables.

    None forgets them; the next lookup reads ``SYSINC_VARS`` again.
    """
    global _cli_vars
    _cli_vars = dict(variables) if variables is not None else None


def _vars_from_environment() -> dict[str, str]:
    raw = os.environ.get("SYSINC_VARS")
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring SYSINC_VARS: not valid JSON")
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring SYSINC_VARS: expected a JSON object")
        return {}
    return {str(k): str(v) for k, v in data.items()}


def get_var(name: str, default: str | None = None) -> str | None:
    """Look up a build variable.

    Build scripts read their settings here, e.g.
    ``get_var("SYSINC_RELATIVIZE", "1")``. Variables given to the CLI
    (``sysinc flags SYSINC_RELATIVIZE=0``) win over the environment. A
    script started outside the CLI can receive them as a JSON object in
    ``SYSINC_VARS``.
    """
    global _cli_vars

    if _cli_vars is None:
        _cli_vars = _vars_from_environment()
    if name in _cli_vars:
        return _cli_vars[name]
    return os.environ.get(name, default)


# Re-export commonly used classes for convenient imports
from sysinc.configure.config import SystemIncludesConfig  # noqa: E402
from sysinc.core.project import Project  # noqa: E402, F811
from sysinc.system_includes import SystemIncludes  # noqa: E402
from sysinc.toolchains import find_toolchain  # noqa: E402
from sysinc.vendor import publish_system_headers, write_version_marker  # noqa: E402

__all__ = [
    # Version
    "__version__",
    # CLI variable access
    "get_var",
    # Project registry (for CLI use)
    "get_registered_projects",
    "_register_project",
    "_clear_registered_projects",
    "_set_build_vars",
    # Core classes
    "Project",
    "SystemIncludes",
    "SystemIncludesConfig",
    # Producers
    "publish_system_headers",
    "write_version_marker",
    # Toolchain lookup
    "find_toolchain",
]
