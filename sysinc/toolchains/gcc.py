# SPDX-License-Identifier: MIT
"""GCC toolchain."""

from __future__ import annotations

from sysinc.tools.toolchain import BaseToolchain


class GccToolchain(BaseToolchain):
    """GCC toolchain for C and C++ development (gcc, g++)."""

    gcc_compatible = True
    include_flag = "-I"
    aliases = ("gcc", "gnu")

    def __init__(self) -> None:
        super().__init__("gcc")
