"""
Configuration constants for schedule_store.

Everything tunable lives here so the reducer, the store and the CLI
share one set of names.
"""

from __future__ import annotations

import logging
import os

# =============================================================================
# COMMAND TAGS
# =============================================================================

# Hosts namespace their actions ("SCHEDULE_ADD_COURSE"). Both the prefixed
# and the bare tag ("ADD_COURSE") are accepted.
ACTION_PREFIX = "SCHEDULE_"


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL_ENV = "SCHEDULE_STORE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """
    Configure root logging for command line use.

    Priority: explicit argument, then $SCHEDULE_STORE_LOG_LEVEL, then WARNING.
    Library modules never call this; they only create module loggers.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.getLevelName(DEFAULT_LOG_LEVEL)
    logging.basicConfig(level=level, format=LOG_FORMAT)
