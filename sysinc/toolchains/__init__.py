# SPDX-License-Identifier: MIT
"""Toolchain definitions (GCC, LLVM, MSVC)."""

from __future__ import annotations

from sysinc.core.errors import UnsupportedToolchainError
from sysinc.toolchains.gcc import GccToolchain
from sysinc.toolchains.llvm import LlvmToolchain
from sysinc.toolchains.msvc import ClangClToolchain, MsvcToolchain
from sysinc.tools.toolchain import BaseToolchain

_TOOLCHAINS: list[type[BaseToolchain]] = [
    GccToolchain,
    LlvmToolchain,
    MsvcToolchain,
    ClangClToolchain,
]


def find_toolchain(name: str) -> BaseToolchain:
    """Create a toolchain by name or alias.

    Args:
        name: Toolchain name or alias (e.g., "gcc", "clang", "msvc").

    Returns:
        A new toolchain instance.

    Raises:
        UnsupportedToolchainError: If no toolchain has that name.
    """
    key = name.lower()
    for cls in _TOOLCHAINS:
        if key in cls.aliases:
            return cls()
    raise UnsupportedToolchainError(name)


__all__ = [
    "find_toolchain",
    # GCC-compatible
    "GccToolchain",
    "LlvmToolchain",
    # MSVC-style
    "MsvcToolchain",
    "ClangClToolchain",
]
