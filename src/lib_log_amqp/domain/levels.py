"""Log level abstraction covering the severities a broker hook subscribes to.

Purpose
-------
Offer a domain-specific representation of log severities that extends the
stdlib levels with ``trace``, ``fatal`` and ``panic`` so hook registrations can
name every standard severity explicitly.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* :data:`STANDARD_LEVELS` – the six severities a hook fires for by default.

System Role
-----------
Used by :class:`~lib_log_amqp.domain.events.LogEntry`, by the formatters to
render the ``level`` key, and by the stdlib bridge to translate
:class:`logging.LogRecord` levels.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured logging payloads."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` numeric level matching this level.

        ``FATAL`` and ``PANIC`` both collapse onto :data:`logging.CRITICAL`.

        Examples
        --------
        >>> LogLevel.PANIC.to_python_level() == logging.CRITICAL
        True
        >>> LogLevel.TRACE.to_python_level()
        5
        """

        return min(self.value, logging.CRITICAL)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve ``name`` case-insensitively, accepting common aliases.

        Examples
        --------
        >>> LogLevel.from_name(" warn ") is LogLevel.WARNING
        True
        >>> LogLevel.from_name("critical") is LogLevel.FATAL
        True
        """
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`.

        Custom numeric levels snap down to the nearest known severity so
        records from third-party loggers are never rejected.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.ERROR) is LogLevel.ERROR
        True
        >>> LogLevel.from_python_level(25) is LogLevel.INFO
        True
        """
        if level >= logging.CRITICAL:
            return cls.FATAL
        candidates = [member for member in cls if member.value <= level]
        if not candidates:
            return cls.TRACE
        return max(candidates, key=lambda member: member.value)

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose value is exactly ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_ALIASES = {
    "WARN": "WARNING",
    "CRITICAL": "FATAL",
    "ERR": "ERROR",
}
# Alternative spellings accepted by :meth:`LogLevel.from_name`.


STANDARD_LEVELS: tuple[LogLevel, ...] = (
    LogLevel.PANIC,
    LogLevel.FATAL,
    LogLevel.ERROR,
    LogLevel.WARNING,
    LogLevel.INFO,
    LogLevel.DEBUG,
)
"""Every standard severity except ``trace``, most severe first."""


__all__ = ["LogLevel", "STANDARD_LEVELS"]
