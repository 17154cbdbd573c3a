"""Port describing the formatter capability used to serialise log entries."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_amqp.domain.events import LogEntry


@runtime_checkable
class FormatterPort(Protocol):
    """Serialise a log entry into the bytes placed on the wire."""

    def format(self, entry: LogEntry) -> bytes:
        """Return the encoded representation of ``entry``."""


__all__ = ["FormatterPort"]
