"""Console entry point for ``python -m lib_log_amqp`` and the console script.

Purpose
-------
Wrap the Click group from :mod:`lib_log_amqp.cli` so packaging checks and
smoke tests get an integer exit code instead of ``SystemExit``.

Contents
--------
* :func:`main` – run the CLI in a test-friendly manner.
"""

from __future__ import annotations

from typing import Sequence

import click

from .cli import cli


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click command group and return its exit code.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Zero on success, the Click exit code otherwise.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    0.1...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name="lib_log_amqp", standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
