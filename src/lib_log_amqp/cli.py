"""Click command group for smoke-testing a broker setup.

Purpose
-------
``lib_log_amqp send`` fires one log entry through a sink configured from the
environment (and optionally a ``.env`` file), which is the quickest way to
confirm credentials, vhost and exchange topology before wiring the hook into
an application.

Contents
--------
* :func:`cli` – root group with the ``--use-dotenv`` toggle.
* :func:`cli_info` – print distribution metadata.
* :func:`cli_send` – publish a single entry.
"""

from __future__ import annotations

from datetime import datetime, timezone

import click
from rich.console import Console

from . import __init__conf__
from . import config as log_config
from .adapters.formatters import JSONFormatter, TextFormatter
from .domain.events import LogEntry
from .domain.levels import LogLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_FORMATTERS = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def _parse_fields(pairs: tuple[str, ...]) -> dict[str, str]:
    """Turn ``key=value`` options into a mapping.

    Examples
    --------
    >>> _parse_fields(("host=web-1", "region = eu"))
    {'host': 'web-1', 'region': 'eu'}
    """
    result: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--field")
        result[key] = value.strip()
    return result


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading settings (env: {log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None) -> None:
    """Publish log entries to an AMQP exchange."""

    if log_config.dotenv_requested(use_dotenv):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the distribution metadata banner."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--message", "-m", required=True, help="Log message to publish.")
@click.option("--level", "-l", default="info", show_default=True, help="Severity name (panic ... debug).")
@click.option("--field", "-f", "field_pairs", multiple=True, metavar="KEY=VALUE", help="Structured field; repeatable.")
@click.option("--format", "format_name", type=click.Choice(sorted(_FORMATTERS)), default="json", show_default=True)
@click.option("--server", default=None, help="Broker HOST[:PORT] (env: LOG_AMQP_SERVER).")
@click.option("--exchange", default=None, help="Exchange name (env: LOG_AMQP_EXCHANGE).")
@click.option("--exchange-type", default=None, help="Exchange kind (env: LOG_AMQP_EXCHANGE_TYPE).")
@click.option("--routing-key", default=None, help="Routing key (env: LOG_AMQP_ROUTING_KEY).")
@click.option("--vhost", "virtual_host", default=None, help="Virtual host (env: LOG_AMQP_VHOST).")
def cli_send(
    message: str,
    level: str,
    field_pairs: tuple[str, ...],
    format_name: str,
    server: str | None,
    exchange: str | None,
    exchange_type: str | None,
    routing_key: str | None,
    virtual_host: str | None,
) -> None:
    """Publish one log entry using settings from the environment."""

    try:
        severity = LogLevel.from_name(level)
        settings = log_config.AMQPSettings.from_env(
            server=server,
            exchange=exchange,
            exchange_type=exchange_type,
            routing_key=routing_key,
            virtual_host=virtual_host,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    formatter = _FORMATTERS[format_name]()
    sink = log_config.build_sink(settings)
    entry = LogEntry(
        timestamp=datetime.now(timezone.utc),
        level=severity,
        message=message,
        fields=_parse_fields(field_pairs),
        logger_name=__init__conf__.shell_command,
        formatter=formatter,
    )
    console = Console(stderr=True, highlight=False)
    try:
        sink.fire(entry)
    except Exception as exc:
        console.print(f"[bold red]publish failed:[/] {exc}")
        raise click.exceptions.Exit(1) from exc
    console.print(f"[green]published[/] {severity.severity} entry to {settings.exchange!r} via {settings.server}")


__all__ = ["cli", "cli_info", "cli_send"]
