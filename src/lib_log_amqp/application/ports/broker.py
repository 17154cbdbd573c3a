"""Ports describing the AMQP broker client consumed by the sink.

Purpose
-------
Keep :class:`~lib_log_amqp.adapters.amqp_sink.AMQPSink` independent of a
concrete AMQP library. The protocols mirror the handful of client calls the
sink issues per fire: dial, open a channel, declare an exchange, publish, and
close.

Contents
--------
* :class:`Publishing` – message value object (content type and body).
* :class:`BrokerClientPort` – dials a connection URI.
* :class:`BrokerConnectionPort` – opens channels and closes the connection.
* :class:`BrokerChannelPort` – declares exchanges and publishes messages.

System Role
-----------
Implemented by :class:`~lib_log_amqp.adapters.pika_client.PikaBrokerClient`
in production and by recording fakes in the test-suite.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class Publishing:
    """Message handed to :meth:`BrokerChannelPort.publish`."""

    content_type: str
    body: bytes


@runtime_checkable
class BrokerChannelPort(Protocol):
    """Lightweight session multiplexed over a broker connection."""

    def exchange_declare(
        self,
        name: str,
        kind: str,
        durable: bool,
        auto_delete: bool,
        internal: bool,
        no_wait: bool,
        arguments: Mapping[str, Any] | None,
    ) -> None:
        """Declare exchange ``name`` of type ``kind`` with the given flags."""

    def publish(
        self,
        exchange: str,
        routing_key: str,
        mandatory: bool,
        immediate: bool,
        message: Publishing,
    ) -> None:
        """Publish ``message`` to ``exchange`` using ``routing_key``."""

    def close(self) -> None:
        """Close the channel."""


@runtime_checkable
class BrokerConnectionPort(Protocol):
    """Open connection to a broker."""

    def channel(self) -> BrokerChannelPort:
        """Open a new channel on this connection."""

    def close(self) -> None:
        """Close the connection."""


@runtime_checkable
class BrokerClientPort(Protocol):
    """Factory for broker connections addressed by URI."""

    def dial(self, uri: str) -> BrokerConnectionPort:
        """Open a connection to the broker at ``uri``."""


__all__ = [
    "BrokerChannelPort",
    "BrokerClientPort",
    "BrokerConnectionPort",
    "Publishing",
]
