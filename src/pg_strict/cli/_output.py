"""Shared output formatting for CLI commands."""

from __future__ import annotations

import json

from pg_strict.adapters._base import ExecutionResult
from pg_strict.api import ConfigRow
from pg_strict.diagnostics.render import render_json, render_text
from pg_strict.diagnostics.types import DiagnosticResult


def format_result(result: DiagnosticResult, *, output_format: str = "text") -> str:
    if output_format == "json":
        return json.dumps(render_json(result), indent=2)
    return render_text(result)


def format_config(rows: list[ConfigRow], *, output_format: str = "text") -> str:
    if output_format == "json":
        return json.dumps([row._asdict() for row in rows], indent=2)

    width = max(len(row.setting) for row in rows)
    return "\n".join(
        f"{row.setting.ljust(width)}  {row.current_value:<4}  {row.description}"
        for row in rows
    )


def format_execution_result(result: ExecutionResult, *, output_format: str = "text") -> str:
    if output_format == "json":
        data = {
            "columns": result.columns,
            "rows": result.rows,
            "row_count": result.row_count,
            "duration_ms": result.duration_ms,
        }
        return json.dumps(data, indent=2, default=str)

    # Text format: simple tabular output.
    lines: list[str] = []
    if result.columns:
        lines.append(" | ".join(result.columns))
        lines.append("-+-".join("-" * max(len(c), 5) for c in result.columns))
        for row in result.rows:
            lines.append(" | ".join(str(row.get(c, "")) for c in result.columns))

    duration = f", {result.duration_ms:.0f}ms" if result.duration_ms is not None else ""
    lines.append(f"\n({result.row_count} rows{duration})")
    return "\n".join(lines)
