# SPDX-License-Identifier: MIT
"""Configuration from build variables."""

from sysinc.configure.config import SystemIncludesConfig

__all__ = ["SystemIncludesConfig"]
