# SPDX-License-Identifier: MIT
"""Configuration for system include wiring.

Settings come from build variables, which can be given on the sysinc
command line (``sysinc info SYSINC_RELATIVIZE=0``) or in the environment:

    SYSINC_RELATIVIZE  0 to emit absolute include paths (default: 1)

``SystemIncludes()`` reads them when no explicit config is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_FALSE_VALUES = ("0", "false", "no", "off")


def parse_bool(value: str | None, default: bool) -> bool:
    """Interpret a build variable as a boolean."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSE_VALUES


@dataclass(frozen=True)
class SystemIncludesConfig:
    """Settings for SystemIncludes.

    Attributes:
        relativize: Whether include paths are made relative to the object
            directory. Turning this off makes flags depend on the checkout
            location.
    """

    relativize: bool = True

    @classmethod
    def from_vars(cls) -> SystemIncludesConfig:
        """Build a config from build variables."""
        from sysinc import get_var

        config = cls(relativize=parse_bool(get_var("SYSINC_RELATIVIZE"), True))
        if not config.relativize:
            logger.warning(
                "Include path relativization is disabled; "
                "compile tasks will be rebuilt when the checkout moves"
            )
        return config
