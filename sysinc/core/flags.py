# SPDX-License-Identifier: MIT
"""Include flag generation for system header search paths.

The compile task's arguments are part of its cache key and are captured
by value. Absolute header paths would make that key depend on where the
checkout (or the artifact cache) lives, so every search path is written
relative to the compile task's object directory instead. This only gives
stable flags when the headers live at a stable offset from that directory,
i.e. inside the project or synced into it by a vendor project. Headers
resolved into a location outside the project are not made stable here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from sysinc.core.errors import UnsupportedToolchainError
from sysinc.tools.toolchain import is_gcc_compatible

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

GCC_INCLUDE_FLAG = "-I"


def relativize(path: Path | str, base: Path | str) -> str:
    """Return ``path`` relative to ``base`` ("../" segments allowed).

    When no relative path exists (e.g., different drives on Windows) the
    absolute path is returned and a warning is logged.
    """
    try:
        return os.path.relpath(path, base)
    except ValueError:
        logger.warning(
            "Cannot express %s relative to %s; include flag will be path dependent",
            path,
            base,
        )
        return str(Path(path).absolute())


def include_flags(
    toolchain: object,
    search_paths: Iterable[Path | str],
    relative_to: Path | str | None,
) -> list[str]:
    """Convert header search paths into compiler arguments.

    Args:
        toolchain: Toolchain the compile task runs with.
        search_paths: Resolved header directories, in resolution order.
        relative_to: Directory the paths are made relative to, or None to
            emit them unchanged.

    Returns:
        Tokens like ``["-I", "../../sys/include", "-I", ...]``.

    Raises:
        UnsupportedToolchainError: If the toolchain is not GCC-compatible.

    Examples:
        >>> from sysinc.toolchains import GccToolchain
        >>> include_flags(GccToolchain(), ["/w/sys/include"], "/w/app/build/obj")
        ['-I', '../../../sys/include']
    """
    if not is_gcc_compatible(toolchain):
        raise UnsupportedToolchainError(toolchain)

    flag = getattr(toolchain, "include_flag", None) or GCC_INCLUDE_FLAG
    result: list[str] = []
    for path in search_paths:
        if relative_to is not None:
            result.extend([flag, relativize(path, relative_to)])
        else:
            result.extend([flag, str(path)])
    return result
