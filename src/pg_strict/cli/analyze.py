"""The `analyze` command: run the enforcement decision without executing."""

from __future__ import annotations

import click

from pg_strict.cli._output import format_result
from pg_strict.cli._shared import (
    DIALECT_OPTION,
    FORMAT_OPTION,
    MODE_CHOICE,
    STDIN_OPTION,
    resolve_sql_stdin,
)
from pg_strict.policy import PRODUCT_TAG, decide
from pg_strict.policy._types import StrictMode
from pg_strict.settings import load_store


@click.command()
@click.argument("sql", required=False)
@DIALECT_OPTION
@FORMAT_OPTION
@click.option("--update", "update_mode", type=MODE_CHOICE, default=None,
              help="Override the UPDATE mode for this run.")
@click.option("--delete", "delete_mode", type=MODE_CHOICE, default=None,
              help="Override the DELETE mode for this run.")
@STDIN_OPTION
def analyze(
    sql: str | None,
    dialect: str | None,
    output_format: str,
    update_mode: str | None,
    delete_mode: str | None,
    from_stdin: bool,
) -> None:
    """Show what enforcement would do with SQL under the configured modes."""
    sql = resolve_sql_stdin(sql, from_stdin)
    modes = load_store().snapshot()
    if update_mode is not None:
        modes = modes._replace(update=StrictMode(update_mode.lower()))
    if delete_mode is not None:
        modes = modes._replace(delete=StrictMode(delete_mode.lower()))

    result = decide(sql, modes, dialect=dialect, tag=PRODUCT_TAG)
    output = format_result(result, output_format=output_format)
    if output:
        click.echo(output)
    if result.blocked:
        raise SystemExit(1)
