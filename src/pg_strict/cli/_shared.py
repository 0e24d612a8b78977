"""Shared helpers for CLI commands."""

from __future__ import annotations

import sys

import click

from pg_strict.adapters._base import ConnectionConfig, DatabaseType
from pg_strict.policy._types import Operation

AUTO_LABELS = {"tool": "pg_strict"}

OPERATION_CHOICE = click.Choice(["update", "delete"], case_sensitive=False)
MODE_CHOICE = click.Choice(["off", "warn", "on"], case_sensitive=False)
FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format.",
)
DIALECT_OPTION = click.option(
    "--dialect", default=None, help="SQL dialect (default: postgres)."
)
STDIN_OPTION = click.option("--from-stdin", is_flag=True, help="Read SQL from stdin.")


def to_operation(value: str) -> Operation:
    operation = Operation.from_token(value)
    if operation is None:
        raise click.BadParameter(f"Unknown operation '{value}'. Valid: update, delete")
    return operation


def resolve_sql_stdin(sql: str | None, from_stdin: bool) -> str:
    """Resolve SQL from positional argument or stdin. Exactly one source required."""
    if sql and from_stdin:
        raise click.UsageError("Provide SQL as an argument or --from-stdin, not both.")
    if from_stdin:
        if sys.stdin.isatty():
            raise click.UsageError("--from-stdin requires piped input (stdin is a terminal).")
        text = sys.stdin.read().strip()
        if not text:
            raise click.UsageError("--from-stdin: stdin was empty.")
        return text
    if not sql:
        raise click.UsageError("Missing argument 'SQL'. Provide SQL or use --from-stdin.")
    return sql


def parse_db(value: str) -> ConnectionConfig:
    """Parse a --db value in 'type:key=val,key=val' format."""
    if ":" not in value:
        raise click.BadParameter(
            f"Expected 'type:key=val' format, got '{value}'.\n"
            f"  e.g. duckdb:path=local.duckdb or postgres:dsn=postgresql://...",
            param_hint="'--db'",
        )
    db_type_str, params_str = value.split(":", 1)

    try:
        db_type = DatabaseType(db_type_str)
    except ValueError as e:
        valid = ", ".join(t.value for t in DatabaseType)
        raise click.BadParameter(
            f"Unknown database type '{db_type_str}'. Valid: {valid}",
            param_hint="'--db'",
        ) from e

    params: dict[str, str] = {}
    if params_str:
        # A postgres DSN may itself contain commas and '=' (query string).
        if db_type == DatabaseType.POSTGRES and params_str.startswith("dsn="):
            params["dsn"] = params_str[len("dsn="):]
            return ConnectionConfig(name=db_type_str, db_type=db_type, params=params)
        for part in params_str.split(","):
            if "=" not in part:
                raise click.BadParameter(
                    f"Expected key=value pair, got '{part}'",
                    param_hint="'--db'",
                )
            k, v = part.split("=", 1)
            params[k.strip()] = v.strip()

    return ConnectionConfig(name=db_type_str, db_type=db_type, params=params)
