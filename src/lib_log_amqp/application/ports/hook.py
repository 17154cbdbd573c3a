"""Port describing the hook-registration contract of the logging framework.

A hook receives every entry whose level appears in :meth:`HookPort.levels`.
Filtering happens upstream in the framework; a hook never re-checks levels.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_amqp.domain.events import LogEntry
from lib_log_amqp.domain.levels import LogLevel


@runtime_checkable
class HookPort(Protocol):
    """Extension point invoked once per qualifying log entry."""

    def fire(self, entry: LogEntry) -> None:
        """Deliver ``entry``; raise on failure."""

    def levels(self) -> tuple[LogLevel, ...]:
        """Return the severities this hook is registered for."""


__all__ = ["HookPort"]
