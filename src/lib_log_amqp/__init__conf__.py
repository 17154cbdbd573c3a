"""Static distribution metadata shown by ``lib_log_amqp info``."""

from __future__ import annotations

from typing import Callable

name = "lib_log_amqp"
title = "Log sink publishing structured log entries to an AMQP exchange"
version = "0.1.0"
homepage = ""
author = "bitranox"
shell_command = "lib_log_amqp"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner through ``writer`` (defaults to ``print``).

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_amqp:\\n\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    emit = writer or (lambda text: print(text, end=""))
    for line in lines:
        emit(line)


def summary_info() -> str:
    """Return the metadata banner as one string ending in a newline."""

    lines: list[str] = []
    print_info(writer=lines.append)
    return "".join(lines)


__all__ = ["print_info", "summary_info", "version"]
