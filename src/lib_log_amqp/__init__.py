"""Public package surface of the AMQP log hook.

Import the sink, its constructors, the formatters and the stdlib bridge from
here; the inner layers stay an implementation detail.
"""

from __future__ import annotations

from .adapters import (
    AMQPLogHandler,
    AMQPSink,
    JSONFormatter,
    PikaBrokerClient,
    TextFormatter,
    new_amqp_sink,
    new_amqp_sink_with_type,
)
from .application.ports import FormatterPort, HookPort, Publishing
from .domain import STANDARD_LEVELS, LogEntry, LogLevel

__all__ = [
    "AMQPLogHandler",
    "AMQPSink",
    "FormatterPort",
    "HookPort",
    "JSONFormatter",
    "LogEntry",
    "LogLevel",
    "PikaBrokerClient",
    "Publishing",
    "STANDARD_LEVELS",
    "TextFormatter",
    "new_amqp_sink",
    "new_amqp_sink_with_type",
]
