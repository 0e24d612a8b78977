"""The `exec` command: execute SQL behind the WHERE clause enforcement interceptor.

The adapter's execute() is the default executor of a HookChain; the strict
interceptor is installed in front of it for the lifetime of the command.
"""

from __future__ import annotations

import asyncio
import json

import click

from pg_strict.adapters._base import AdapterError, ConnectionConfig
from pg_strict.adapters._registry import get_adapter
from pg_strict.cli._output import format_execution_result
from pg_strict.cli._shared import (
    AUTO_LABELS,
    DIALECT_OPTION,
    STDIN_OPTION,
    parse_db,
    resolve_sql_stdin,
)
from pg_strict.diagnostics import DiagnosticResult, Level
from pg_strict.diagnostics.render import render_json
from pg_strict.errors import AnalysisBlocked, PolicyViolation
from pg_strict.hooks import HookChain, install_strict, uninstall_strict
from pg_strict.querylog import cleanup_old_logs, log_query
from pg_strict.settings import load_store


def _decision_label(result: DiagnosticResult | None) -> str:
    level = result.max_level if result is not None else None
    if level is None:
        return "allow"
    return "deny" if level == Level.ERROR else "warn"


async def _run_exec(
    sql: str,
    config: ConnectionConfig,
    *,
    dialect: str | None,
    output_format: str,
) -> int:
    """Run SQL through the interceptor chain. Returns exit code."""
    store = load_store()
    modes = store.snapshot()
    decisions: list[DiagnosticResult] = []

    adapter = get_adapter(config.db_type)()
    await adapter.connect(config)
    chain = HookChain(adapter.execute)
    interceptor = install_strict(chain, store, dialect=dialect, on_decision=decisions.append)

    def _log(decision: str, *, duration_ms: float | None = None, error: str | None = None) -> None:
        result = decisions[-1] if decisions else None
        statements = result.statements if result is not None else []
        log_query(
            sql=sql,
            decision=decision,
            db=config.name,
            dialect=dialect,
            operations=[s.operation.value for s in statements],
            tables=[s.table for s in statements if s.table is not None],
            modes={"update": modes.update.value, "delete": modes.delete.value},
            diagnostics=[str(d.code) for d in result.diagnostics] if result else [],
            duration_ms=duration_ms,
            error=error,
        )

    try:
        exec_result = await chain.execute(sql, labels=AUTO_LABELS)
    except (PolicyViolation, AnalysisBlocked) as e:
        _log("deny", error=str(e))
        if output_format == "json":
            envelope: dict[str, object] = {"decision": "deny"}
            if decisions:
                envelope.update(render_json(decisions[-1]))
            envelope["error"] = str(e)
            click.echo(json.dumps(envelope, indent=2))
        else:
            click.echo(f"error: {e}", err=True)
        return 1
    except AdapterError as e:
        _log("error", error=str(e))
        raise
    finally:
        uninstall_strict(chain, interceptor)
        await adapter.close()

    result = decisions[-1] if decisions else None
    decision = _decision_label(result)
    _log(decision, duration_ms=exec_result.duration_ms)

    if output_format == "json":
        envelope = {"decision": decision}
        if result is not None:
            envelope.update(render_json(result))
        envelope["columns"] = exec_result.columns
        envelope["rows"] = exec_result.rows
        envelope["row_count"] = exec_result.row_count
        envelope["duration_ms"] = exec_result.duration_ms
        click.echo(json.dumps(envelope, indent=2, default=str))
    else:
        click.echo(format_execution_result(exec_result, output_format="text"))
    return 0


@click.command("exec")
@click.argument("sql", required=False)
@click.option(
    "--db", required=True, envvar="PG_STRICT_DB",
    help="Connection as type:key=val (e.g. duckdb:path=local.duckdb).",
)
@DIALECT_OPTION
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="json",
    help="Output format.",
)
@STDIN_OPTION
def exec_cmd(
    sql: str | None,
    db: str,
    dialect: str | None,
    output_format: str,
    from_stdin: bool,
) -> None:
    """Execute SQL with WHERE clause enforcement in front of the database."""
    sql = resolve_sql_stdin(sql, from_stdin)
    cleanup_old_logs()

    try:
        config = parse_db(db)
    except click.BadParameter as e:
        click.echo(f"error: {e.format_message()}", err=True)
        raise SystemExit(1) from e

    try:
        # Use adapter's dialect if none specified.
        if dialect is None:
            dialect = get_adapter(config.db_type)().dialect()

        exit_code = asyncio.run(
            _run_exec(sql, config, dialect=dialect, output_format=output_format)
        )
    except AdapterError as e:
        if output_format == "json":
            click.echo(json.dumps({"decision": "error", "error": str(e)}, indent=2))
        else:
            click.echo(f"error: {e}", err=True)
        raise SystemExit(1) from e

    if exit_code != 0:
        raise SystemExit(exit_code)
