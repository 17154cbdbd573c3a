"""Domain value describing a single structured log entry.

Purpose
-------
Provide an immutable representation of the log entry handed to hooks. The
entry carries the default formatter of whoever produced it, so hooks never
reach for a global logger to find one.

Contents
--------
* :class:`LogEntry` dataclass with helper methods.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer; formatters serialise it and
:class:`~lib_log_amqp.adapters.amqp_sink.AMQPSink` publishes the result.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from .levels import LogLevel

if TYPE_CHECKING:
    from lib_log_amqp.application.ports.formatter import FormatterPort


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry passed to every registered hook.

    Attributes
    ----------
    timestamp:
        Time of the entry in timezone-aware UTC.
    level:
        :class:`LogLevel` severity associated with the entry.
    message:
        Rendered message passed by the caller.
    fields:
        Shallow copy of caller-supplied structured key/value pairs.
    logger_name:
        Logical logger emitting the entry; may be empty.
    exc_info:
        Optional exception text captured when logging failures.
    formatter:
        Default formatter of the producing logger. Hooks fall back to it when
        they have no formatter of their own. Excluded from equality and
        serialisation.
    """

    timestamp: datetime
    level: LogLevel
    message: str
    fields: dict[str, Any] = field(default_factory=dict)
    logger_name: str = ""
    exc_info: str | None = None
    formatter: "FormatterPort | None" = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "fields", dict(self.fields))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a dictionary with ISO8601 timestamps."""

        data = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "message": self.message,
            "fields": dict(self.fields),
            "logger_name": self.logger_name,
        }
        if self.exc_info is not None:
            data["exc_info"] = self.exc_info
        return data

    def to_json(self) -> str:
        """Serialize the entry to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    def with_fields(self, **fields: Any) -> "LogEntry":
        """Return a copy with ``fields`` merged over the existing ones."""

        return replace(self, fields={**self.fields, **fields})

    def replace(self, **changes: Any) -> "LogEntry":
        """Return a copied entry with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEntry"]
