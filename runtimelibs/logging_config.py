"""Logging setup for hosts that do not configure logging themselves."""

from __future__ import annotations

import logging
import sys
from typing import Union

from .domain.log_level import LogLevel

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


def configure_logging(level: Union[LogLevel, str] = LogLevel.INFO, logger_name: str = "runtimelibs") -> logging.Logger:
    """Attach a single stderr handler to ``logger_name`` and return the logger.

    Calling it again replaces the handler instead of stacking a new one.
    """
    if isinstance(level, str):
        level = LogLevel.parse(level)
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.value)
    return logger
