"""Logger factory for the gaitpro engine."""

from __future__ import annotations

import logging
import os
from typing import Final

# Package level, read once from GAITPRO_LOG_LEVEL when gaitpro is imported
_LEVEL_NAME: Final[str] = os.getenv("GAITPRO_LOG_LEVEL", "INFO").upper()
_PACKAGE_LOGGER_LEVEL: Final[int] = getattr(logging, _LEVEL_NAME, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return the logger of a gaitpro module at the package level.

    No handlers are attached; the solver loop or application that drives the
    motion decides where records go.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_PACKAGE_LOGGER_LEVEL)
    return logger
