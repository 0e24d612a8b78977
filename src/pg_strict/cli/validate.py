"""The `check` and `validate` commands: inspect one SQL text for a given operation."""

from __future__ import annotations

import click

from pg_strict.api import check_where_clause, validate_delete, validate_update
from pg_strict.cli._shared import (
    DIALECT_OPTION,
    OPERATION_CHOICE,
    STDIN_OPTION,
    resolve_sql_stdin,
    to_operation,
)
from pg_strict.errors import ParseFailure, PolicyViolation
from pg_strict.policy._types import Operation


@click.command()
@click.argument("sql", required=False)
@click.option(
    "--type", "stmt_type", required=True,
    help="Statement kind to check (update or delete; anything else reports false).",
)
@DIALECT_OPTION
@STDIN_OPTION
def check(sql: str | None, stmt_type: str, dialect: str | None, from_stdin: bool) -> None:
    """Print whether every statement of --type in SQL has a WHERE clause."""
    sql = resolve_sql_stdin(sql, from_stdin)
    click.echo("true" if check_where_clause(sql, stmt_type, dialect=dialect) else "false")


@click.command()
@click.argument("sql", required=False)
@click.option("--operation", required=True, type=OPERATION_CHOICE, help="Operation to validate.")
@DIALECT_OPTION
@STDIN_OPTION
def validate(sql: str | None, operation: str, dialect: str | None, from_stdin: bool) -> None:
    """Fail unless every UPDATE (or DELETE) statement in SQL has a WHERE clause."""
    sql = resolve_sql_stdin(sql, from_stdin)
    validator = validate_update if to_operation(operation) == Operation.UPDATE else validate_delete
    try:
        validator(sql, dialect=dialect)
    except (ParseFailure, PolicyViolation) as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1) from e
    click.echo("ok")
