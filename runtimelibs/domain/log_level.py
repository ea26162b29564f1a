"""Severities understood by the library manager."""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def from_logging(cls, level: int) -> "LogLevel":
        """Return the closest level that is at least as severe as ``level``."""
        for member in cls:
            if member.value >= level:
                return member
        return cls.ERROR

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        name = value.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError as exc:
            raise ValueError(f"unknown log level: {value}") from exc
