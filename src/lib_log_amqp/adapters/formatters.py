"""Formatters turning :class:`LogEntry` values into message bodies.

Purpose
-------
Provide the two serialisations log hooks commonly publish: a compact JSON
object per entry and a ``key=value`` text line.

Contents
--------
* :class:`JSONFormatter` – JSON object with ``time``/``level``/``msg`` keys.
* :class:`TextFormatter` – logfmt-style line.
* :func:`_entry_payload` – shared mapping builder honouring reserved keys.

System Role
-----------
Either formatter can serve as the default formatter embedded in an entry or as
the override passed to :meth:`AMQPSink.with_formatter`.
"""

from __future__ import annotations

import json
import re
from typing import Any

from lib_log_amqp.application.ports.formatter import FormatterPort
from lib_log_amqp.domain.events import LogEntry

TIME_KEY = "time"
LEVEL_KEY = "level"
MSG_KEY = "msg"
LOGGER_KEY = "logger"
ERROR_KEY = "error"

_RESERVED = frozenset({TIME_KEY, LEVEL_KEY, MSG_KEY, LOGGER_KEY, ERROR_KEY})
_BARE_VALUE = re.compile(r"^[A-Za-z0-9\-._/@^+]+$")


def _entry_payload(entry: LogEntry, *, timestamp: str | None) -> dict[str, Any]:
    """Merge ``entry.fields`` with the reserved keys.

    Fields named like a reserved key are kept under a ``fields.`` prefix.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_amqp.domain.levels import LogLevel
    >>> entry = LogEntry(datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.INFO, 'hi', {'msg': 'x', 'a': 1})
    >>> sorted(_entry_payload(entry, timestamp=None).items())
    [('a', 1), ('fields.msg', 'x'), ('level', 'info'), ('msg', 'hi')]
    """
    data: dict[str, Any] = {}
    for key, value in entry.fields.items():
        if key in _RESERVED:
            data[f"fields.{key}"] = value
        else:
            data[key] = value
    if timestamp is not None:
        data[TIME_KEY] = timestamp
    data[LEVEL_KEY] = entry.level.severity
    data[MSG_KEY] = entry.message
    if entry.logger_name:
        data[LOGGER_KEY] = entry.logger_name
    if entry.exc_info is not None:
        data[ERROR_KEY] = entry.exc_info
    return data


class _TimestampMixin:
    _disable_timestamp: bool
    _timestamp_format: str | None

    def _render_timestamp(self, entry: LogEntry) -> str | None:
        if self._disable_timestamp:
            return None
        if self._timestamp_format is None:
            return entry.timestamp.isoformat()
        return entry.timestamp.strftime(self._timestamp_format)


class JSONFormatter(_TimestampMixin, FormatterPort):
    """Render entries as one compact JSON object with sorted keys."""

    def __init__(
        self,
        *,
        disable_timestamp: bool = False,
        timestamp_format: str | None = None,
        pretty: bool = False,
    ) -> None:
        self._disable_timestamp = disable_timestamp
        self._timestamp_format = timestamp_format
        self._pretty = pretty

    def format(self, entry: LogEntry) -> bytes:
        """Return the UTF-8 JSON encoding of ``entry``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from lib_log_amqp.domain.levels import LogLevel
        >>> entry = LogEntry(datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.ERROR, 'disk full')
        >>> JSONFormatter(disable_timestamp=True).format(entry)
        b'{"level":"error","msg":"disk full"}'
        """
        payload = _entry_payload(entry, timestamp=self._render_timestamp(entry))
        if self._pretty:
            text = json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False, default=str)
        else:
            text = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
        return text.encode("utf-8")


class TextFormatter(_TimestampMixin, FormatterPort):
    """Render entries as ``key=value`` pairs in a single line."""

    def __init__(self, *, disable_timestamp: bool = False, timestamp_format: str | None = None) -> None:
        self._disable_timestamp = disable_timestamp
        self._timestamp_format = timestamp_format

    def format(self, entry: LogEntry) -> bytes:
        """Return the UTF-8 text line for ``entry``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from lib_log_amqp.domain.levels import LogLevel
        >>> entry = LogEntry(datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.WARNING, 'low disk', {'free': '2%'})
        >>> TextFormatter(disable_timestamp=True).format(entry)
        b'level=warning msg="low disk" free="2%"'
        """
        payload = _entry_payload(entry, timestamp=self._render_timestamp(entry))
        leading = [key for key in (TIME_KEY, LEVEL_KEY, MSG_KEY, LOGGER_KEY, ERROR_KEY) if key in payload]
        trailing = sorted(key for key in payload if key not in _RESERVED)
        line = " ".join(f"{key}={_quote(payload[key])}" for key in leading + trailing)
        return line.encode("utf-8")


def _quote(value: Any) -> str:
    """Return ``value`` as text, quoted when it holds characters outside the bare set."""
    text = value if isinstance(value, str) else str(value)
    if _BARE_VALUE.match(text):
        return text
    return json.dumps(text, ensure_ascii=False)


__all__ = ["JSONFormatter", "TextFormatter"]
