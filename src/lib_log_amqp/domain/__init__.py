"""Domain entities and value objects used by the broker logging hook."""

from __future__ import annotations

from .events import LogEntry
from .levels import STANDARD_LEVELS, LogLevel

__all__ = [
    "LogEntry",
    "LogLevel",
    "STANDARD_LEVELS",
]
