"""Logging setup for the API process."""

import logging
import sys
from typing import Optional

from trade_ledger.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Library loggers capped regardless of the application level
_LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def setup_logging(settings: Optional[Settings] = None) -> int:
    """
    Send logs to stdout and set the ledger's level from settings.

    An unrecognized log_level falls back to INFO. Returns the level applied.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger("trade_ledger").setLevel(level)
    for name, library_level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)
    return level
