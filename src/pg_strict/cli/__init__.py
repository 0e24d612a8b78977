"""CLI entry point. `pg-strict` resolves here."""

from __future__ import annotations

import click
from loguru import logger

from pg_strict.cli.analyze import analyze
from pg_strict.cli.config import config, disable, enable, warn
from pg_strict.cli.exec import exec_cmd
from pg_strict.cli.validate import check, validate


def _stderr_sink(message) -> None:
    # Resolve stderr at write time so redirected streams (CliRunner) are honoured.
    click.echo(message, err=True, nl=False)


@click.group()
@click.version_option(package_name="pg-strict")
def main() -> None:
    """pg-strict: block or warn on UPDATE/DELETE statements without WHERE."""
    logger.remove()
    logger.add(_stderr_sink, level="WARNING", format="{level.name}: {message}")


main.add_command(check)
main.add_command(validate)
main.add_command(analyze)
main.add_command(config)
main.add_command(enable)
main.add_command(disable)
main.add_command(warn)
main.add_command(exec_cmd)
