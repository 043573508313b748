# SPDX-License-Identifier: MIT
"""Tool and toolchain abstractions."""
