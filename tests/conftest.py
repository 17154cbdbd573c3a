from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

import pytest

from lib_log_amqp.application.ports.broker import Publishing
from lib_log_amqp.domain.events import LogEntry
from lib_log_amqp.domain.levels import LogLevel


class StaticFormatter:
    """Formatter returning a fixed payload and counting its calls."""

    def __init__(self, payload: bytes) -> None:
        self.payload = payload
        self.calls: list[LogEntry] = []

    def format(self, entry: LogEntry) -> bytes:
        self.calls.append(entry)
        return self.payload


class FailingFormatter:
    def __init__(self, error: Exception) -> None:
        self.error = error

    def format(self, entry: LogEntry) -> bytes:
        raise self.error


@dataclass
class FakeBroker:
    """Recording broker client; ``fail_on`` names the step that raises."""

    fail_on: str | None = None
    error: Exception = field(default_factory=lambda: ConnectionError("broker said no"))
    calls: list[tuple[str, Any]] = field(default_factory=list)
    connection_closes: int = 0
    channel_closes: int = 0

    def _maybe_fail(self, step: str) -> None:
        if self.fail_on == step:
            raise self.error

    def dial(self, uri: str) -> "_FakeConnection":
        self.calls.append(("dial", uri))
        self._maybe_fail("dial")
        return _FakeConnection(self)

    @property
    def steps(self) -> list[str]:
        return [name for name, _ in self.calls]

    def published(self) -> list[tuple[str, str, bool, bool, Publishing]]:
        return [payload for name, payload in self.calls if name == "publish"]

    def declared(self) -> list[tuple[Any, ...]]:
        return [payload for name, payload in self.calls if name == "exchange_declare"]


class _FakeConnection:
    def __init__(self, broker: FakeBroker) -> None:
        self._broker = broker

    def channel(self) -> "_FakeChannel":
        self._broker.calls.append(("channel", None))
        self._broker._maybe_fail("channel")
        return _FakeChannel(self._broker)

    def close(self) -> None:
        self._broker.calls.append(("connection_close", None))
        self._broker.connection_closes += 1


class _FakeChannel:
    def __init__(self, broker: FakeBroker) -> None:
        self._broker = broker

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
        self._broker.calls.append(("exchange_declare", (name, kind, durable, auto_delete, internal, no_wait, arguments)))
        self._broker._maybe_fail("exchange_declare")

    def publish(self, exchange: str, routing_key: str, mandatory: bool, immediate: bool, message: Publishing) -> None:
        self._broker.calls.append(("publish", (exchange, routing_key, mandatory, immediate, message)))
        self._broker._maybe_fail("publish")

    def close(self) -> None:
        self._broker.calls.append(("channel_close", None))
        self._broker.channel_closes += 1


@pytest.fixture
def fake_broker() -> FakeBroker:
    return FakeBroker()


@pytest.fixture
def entry_factory() -> Callable[..., LogEntry]:
    def _factory(**overrides: Any) -> LogEntry:
        data: dict[str, Any] = {
            "timestamp": datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
            "level": LogLevel.ERROR,
            "message": "disk full",
            "fields": {},
            "logger_name": "",
            "formatter": StaticFormatter(b'{"level":"error","msg":"disk full"}'),
        }
        data.update(overrides)
        return LogEntry(**data)

    return _factory


@pytest.fixture
def static_formatter() -> type[StaticFormatter]:
    return StaticFormatter


@pytest.fixture
def failing_formatter() -> type[FailingFormatter]:
    return FailingFormatter
