"""Database adapter protocol — the default execution path behind the interceptor chain."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


class DatabaseType(enum.Enum):
    POSTGRES = "postgres"
    DUCKDB = "duckdb"


@dataclass
class ConnectionConfig:
    name: str
    db_type: DatabaseType
    params: dict[str, str] = field(default_factory=dict)


@dataclass
class ExecutionResult:
    """Outcome of one executed SQL text."""

    columns: list[str]
    rows: list[dict[str, object]]
    row_count: int
    duration_ms: float | None = None

    @classmethod
    def from_tuples(
        cls,
        columns: list[str],
        tuples: list[tuple],
        *,
        started: float,
        affected: int | None = None,
    ) -> ExecutionResult:
        """Zip driver tuples into dicts; `affected` overrides the row count for DML."""
        rows = [dict(zip(columns, t, strict=True)) for t in tuples]
        count = len(rows) if affected is None else max(affected, 0)
        return cls(
            columns=columns,
            rows=rows,
            row_count=count,
            duration_ms=(time.monotonic() - started) * 1000,
        )


class AdapterError(Exception):
    """Raised by adapters for connection/execution failures."""


def label_comment(labels: dict[str, str] | None) -> str:
    """Render labels as a leading SQL comment ('' when there are none)."""
    if not labels:
        return ""
    label_str = ", ".join(f"{k}={v}" for k, v in labels.items())
    return f"/* pg_strict: {label_str} */ "


@runtime_checkable
class DatabaseAdapter(Protocol):
    async def connect(self, config: ConnectionConfig) -> None: ...
    async def close(self) -> None: ...
    async def execute(
        self, sql: str, *, labels: dict[str, str] | None = None
    ) -> ExecutionResult: ...
    def dialect(self) -> str: ...
