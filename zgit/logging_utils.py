"""
Logging helpers for zgit.

Verbosity comes from the environment rather than a flag: every flag zgit
does not own has to reach git untouched.
"""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "ZGIT_LOG_LEVEL"

_VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
}


def resolve_level(value: Optional[str]) -> int:
    """
    Translate a ZGIT_LOG_LEVEL value into a logging level.

    Accepts level names (``info``, ``DEBUG``) or a verbosity count:
    0 -> WARNING, 1 -> INFO, 2 or more -> DEBUG. Unknown values fall back
    to WARNING.
    """
    if not value:
        return logging.WARNING
    value = value.strip()
    if value.isdigit():
        return _VERBOSITY_LEVELS.get(int(value), logging.DEBUG)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(value: Optional[str] = None) -> None:
    """Configure the root logger from ``value`` or $ZGIT_LOG_LEVEL."""
    if value is None:
        value = os.environ.get(LOG_LEVEL_ENV)

    logging.basicConfig(
        level=resolve_level(value),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
