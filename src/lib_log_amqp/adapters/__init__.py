"""Adapters implementing the hook, formatter and broker client ports."""

from __future__ import annotations

from .amqp_sink import AMQPSink, new_amqp_sink, new_amqp_sink_with_type
from .formatters import JSONFormatter, TextFormatter
from .logging_handler import AMQPLogHandler, entry_from_record
from .pika_client import PikaBrokerClient

__all__ = [
    "AMQPLogHandler",
    "AMQPSink",
    "JSONFormatter",
    "PikaBrokerClient",
    "TextFormatter",
    "entry_from_record",
    "new_amqp_sink",
    "new_amqp_sink_with_type",
]
