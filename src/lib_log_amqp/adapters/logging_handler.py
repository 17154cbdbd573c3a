"""Bridge from the stdlib :mod:`logging` framework to hook ports.

Purpose
-------
Let applications attach any :class:`HookPort` (typically
:class:`~lib_log_amqp.adapters.amqp_sink.AMQPSink`) to ordinary
:mod:`logging` loggers. The handler plays the role of the framework's hook
dispatcher: it builds a :class:`LogEntry`, checks the hook's levels and fires.

Contents
--------
* :class:`AMQPLogHandler` – :class:`logging.Handler` subclass.
* :func:`entry_from_record` – :class:`logging.LogRecord` to :class:`LogEntry`.

System Role
-----------
Outermost adapter. Failures raised by the hook go to
:meth:`logging.Handler.handleError`, as for every stdlib handler.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any

from lib_log_amqp.application.ports.formatter import FormatterPort
from lib_log_amqp.application.ports.hook import HookPort
from lib_log_amqp.domain.events import LogEntry
from lib_log_amqp.domain.levels import LogLevel

from .formatters import JSONFormatter

_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "fields", "taskName"}
# Attributes every LogRecord carries; anything else came from ``extra=``.


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    explicit = getattr(record, "fields", None)
    fields: dict[str, Any] = dict(explicit) if isinstance(explicit, dict) else {}
    for key, value in vars(record).items():
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
            fields.setdefault(key, value)
    return fields


def entry_from_record(
    record: logging.LogRecord,
    *,
    formatter: FormatterPort | None,
    exc_text: str | None = None,
) -> LogEntry:
    """Convert ``record`` into a :class:`LogEntry` carrying ``formatter``.

    Fields come from ``extra={"fields": {...}}`` and from any other
    non-standard attribute supplied through ``extra``.

    Examples
    --------
    >>> record = logging.LogRecord("app", logging.ERROR, __file__, 1, "disk %s", ("full",), None)
    >>> record.fields = {"mount": "/var"}
    >>> entry = entry_from_record(record, formatter=None)
    >>> entry.level, entry.message, entry.fields, entry.logger_name
    (<LogLevel.ERROR: 40>, 'disk full', {'mount': '/var'}, 'app')
    """
    return LogEntry(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=LogLevel.from_python_level(record.levelno),
        message=record.getMessage(),
        fields=_record_fields(record),
        logger_name=record.name,
        exc_info=exc_text,
        formatter=formatter,
    )


class AMQPLogHandler(logging.Handler):
    """Dispatch stdlib log records to a :class:`HookPort`.

    Records emitted while the same thread is already inside :meth:`emit` are
    dropped. The broker client logs through :mod:`logging` as well, and
    without this guard a handler attached to the root logger would recurse.
    """

    def __init__(
        self,
        hook: HookPort,
        *,
        formatter: FormatterPort | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level=level)
        self.hook = hook
        self.entry_formatter: FormatterPort = formatter or JSONFormatter()
        self._hook_levels = frozenset(hook.levels())
        self._local = threading.local()

    def emit(self, record: logging.LogRecord) -> None:
        if getattr(self._local, "active", False):
            return
        self._local.active = True
        try:
            entry = self._build_entry(record)
            if entry.level in self._hook_levels:
                self.hook.fire(entry)
        except Exception:
            self.handleError(record)
        finally:
            self._local.active = False

    def _build_entry(self, record: logging.LogRecord) -> LogEntry:
        exc_text = None
        if record.exc_info:
            exc_text = logging.Formatter().formatException(record.exc_info)
        elif record.exc_text:
            exc_text = record.exc_text
        return entry_from_record(record, formatter=self.entry_formatter, exc_text=exc_text)


__all__ = ["AMQPLogHandler", "entry_from_record"]
