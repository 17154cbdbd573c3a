"""Configuration helpers: ``.env`` loading and environment-driven sink settings.

Purpose
-------
Translate ``LOG_AMQP_*`` environment variables (optionally seeded from a
``.env`` file) into a validated :class:`AMQPSettings` value and build the sink
from it.

Contents
--------
* :func:`enable_dotenv` – load the nearest ``.env`` without overriding the
  real environment.
* :class:`AMQPSettings` – immutable sink configuration.
* :func:`build_sink` – construct an :class:`AMQPSink` from settings.

System Role
-----------
Used by the CLI and by host applications that prefer environment-based
configuration over calling the constructors directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from lib_log_amqp.adapters.amqp_sink import DEFAULT_CONTENT_TYPE, DEFAULT_EXCHANGE_TYPE, AMQPSink
from lib_log_amqp.application.ports.broker import BrokerClientPort
from lib_log_amqp.application.ports.formatter import FormatterPort

DOTENV_ENV_VAR = "LIB_LOG_AMQP_USE_DOTENV"
ENV_PREFIX = "LOG_AMQP_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

_DOTENV_LOADED: Path | None = None
_DOTENV_ATTEMPTED = False


def enable_dotenv(path: Path | str | None = None) -> Path | None:
    """Load ``path`` or the nearest ``.env`` above the working directory.

    Existing environment variables keep precedence. The lookup runs once per
    process; later calls return the cached result.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    if _DOTENV_ATTEMPTED:
        return _DOTENV_LOADED
    _DOTENV_ATTEMPTED = True
    candidate = str(path) if path is not None else find_dotenv(usecwd=True)
    if not candidate or not Path(candidate).is_file():
        return None
    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = Path(candidate).resolve()
    return _DOTENV_LOADED


def dotenv_requested(flag: bool | None) -> bool:
    """Return whether ``.env`` loading is requested.

    An explicit CLI ``flag`` wins; otherwise :data:`DOTENV_ENV_VAR` decides.

    Examples
    --------
    >>> dotenv_requested(False)
    False
    >>> _ = os.environ.pop(DOTENV_ENV_VAR, None)
    >>> dotenv_requested(None)
    False
    """
    if flag is not None:
        return flag
    return _parse_bool(DOTENV_ENV_VAR, os.getenv(DOTENV_ENV_VAR), default=False)


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    _DOTENV_LOADED = None
    _DOTENV_ATTEMPTED = False


def _parse_bool(name: str, value: str | None, *, default: bool) -> bool:
    """Interpret ``1/true/yes/on`` and ``0/false/no/off`` strings.

    Examples
    --------
    >>> _parse_bool("X", " On ", default=False)
    True
    >>> _parse_bool("X", None, default=True)
    True
    >>> _parse_bool("X", "maybe", default=True)
    Traceback (most recent call last):
    ...
    ValueError: X must be a boolean (got 'maybe')
    """
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (got {value!r})")


def _validate_server(name: str, server: str) -> str:
    """Check ``server`` is ``HOST`` or ``HOST:PORT`` with a positive port.

    Examples
    --------
    >>> _validate_server("S", "rabbit:5672")
    'rabbit:5672'
    >>> _validate_server("S", "rabbit:0")
    Traceback (most recent call last):
    ...
    ValueError: S port must be positive
    """
    server = server.strip()
    if not server:
        raise ValueError(f"{name} must be set (HOST or HOST:PORT)")
    host, sep, port_str = server.rpartition(":")
    if not sep:
        return server
    if not host:
        raise ValueError(f"{name} must use HOST:PORT")
    try:
        port = int(port_str)
    except ValueError as exc:
        raise ValueError(f"{name} port must be an integer") from exc
    if port <= 0:
        raise ValueError(f"{name} port must be positive")
    return server


@dataclass(slots=True, frozen=True)
class AMQPSettings:
    """Validated sink configuration.

    Field names match the :class:`AMQPSink` keyword arguments; the matching
    environment variable is ``LOG_AMQP_`` plus the upper-cased name
    (``virtual_host`` reads ``LOG_AMQP_VHOST``).
    """

    server: str
    exchange: str
    routing_key: str = ""
    username: str = "guest"
    password: str = "guest"
    virtual_host: str = ""
    exchange_type: str = DEFAULT_EXCHANGE_TYPE
    durable: bool = True
    auto_deleted: bool = False
    internal: bool = False
    no_wait: bool = False
    mandatory: bool = False
    immediate: bool = False
    content_type: str = DEFAULT_CONTENT_TYPE

    def __post_init__(self) -> None:
        object.__setattr__(self, "server", _validate_server(_env_name("server"), self.server))
        if not self.exchange.strip():
            raise ValueError(f"{_env_name('exchange')} must be set")
        if not self.exchange_type.strip():
            raise ValueError(f"{_env_name('exchange_type')} must not be empty")
        if not self.content_type.strip():
            raise ValueError(f"{_env_name('content_type')} must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "AMQPSettings":
        """Read settings from ``environ`` (default :data:`os.environ`).

        Keyword ``overrides`` that are not ``None`` win over the environment.

        Examples
        --------
        >>> env = {"LOG_AMQP_SERVER": "rabbit:5672", "LOG_AMQP_EXCHANGE": "logs", "LOG_AMQP_DURABLE": "0"}
        >>> settings = AMQPSettings.from_env(env, routing_key="app.error")
        >>> settings.server, settings.durable, settings.routing_key
        ('rabbit:5672', False, 'app.error')
        """
        source = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for item in fields(cls):
            override = overrides.get(item.name)
            if override is not None:
                values[item.name] = override
                continue
            raw = source.get(_env_name(item.name))
            if raw is None:
                continue
            if item.type in (bool, "bool"):
                values[item.name] = _parse_bool(_env_name(item.name), raw, default=bool(item.default))
            else:
                values[item.name] = raw
        unknown = set(overrides) - {item.name for item in fields(cls)}
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")
        values.setdefault("server", "")
        values.setdefault("exchange", "")
        return cls(**values)


def _env_name(field_name: str) -> str:
    if field_name == "virtual_host":
        return f"{ENV_PREFIX}VHOST"
    return f"{ENV_PREFIX}{field_name.upper()}"


def build_sink(
    settings: AMQPSettings,
    *,
    client: BrokerClientPort | None = None,
    formatter: FormatterPort | None = None,
) -> AMQPSink:
    """Return an :class:`AMQPSink` configured from ``settings``."""

    sink = AMQPSink(
        server=settings.server,
        username=settings.username,
        password=settings.password,
        exchange=settings.exchange,
        exchange_type=settings.exchange_type,
        virtual_host=settings.virtual_host,
        routing_key=settings.routing_key,
        durable=settings.durable,
        auto_deleted=settings.auto_deleted,
        internal=settings.internal,
        no_wait=settings.no_wait,
        mandatory=settings.mandatory,
        immediate=settings.immediate,
        client=client,
    ).with_content_type(settings.content_type)
    if formatter is not None:
        sink.with_formatter(formatter)
    return sink


__all__ = [
    "AMQPSettings",
    "DOTENV_ENV_VAR",
    "build_sink",
    "dotenv_requested",
    "enable_dotenv",
]
