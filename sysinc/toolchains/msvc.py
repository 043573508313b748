# SPDX-License-Identifier: MIT
"""Microsoft Visual C++ toolchain.

MSVC uses ``/I`` style flags. System header wiring is only defined for
GCC-compatible compilers, so this toolchain is rejected by the include
flag generator rather than given guessed flags.
"""

from __future__ import annotations

from sysinc.tools.toolchain import BaseToolchain


class MsvcToolchain(BaseToolchain):
    """MSVC toolchain (cl.exe)."""

    aliases = ("msvc", "cl")

    def __init__(self) -> None:
        super().__init__("msvc")


class ClangClToolchain(BaseToolchain):
    """Clang with the MSVC-compatible driver (clang-cl)."""

    aliases = ("clang-cl",)

    def __init__(self) -> None:
        super().__init__("clang-cl")
