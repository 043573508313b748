# SPDX-License-Identifier: MIT
"""LLVM/Clang toolchain.

Clang accepts the GCC command-line syntax, so include flags are the same
as for GCC.
"""

from __future__ import annotations

from sysinc.tools.toolchain import BaseToolchain


class LlvmToolchain(BaseToolchain):
    """LLVM toolchain (clang, clang++)."""

    gcc_compatible = True
    include_flag = "-I"
    aliases = ("llvm", "clang")

    def __init__(self) -> None:
        super().__init__("llvm")
