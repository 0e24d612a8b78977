"""DuckDB adapter — in-process default executor, used for local runs and tests."""

from __future__ import annotations

import time

import duckdb as _duckdb

from pg_strict import __version__
from pg_strict.adapters._base import (
    AdapterError,
    ConnectionConfig,
    ExecutionResult,
    label_comment,
)


class DuckDBAdapter:
    """Runs SQL on a DuckDB file (or `:memory:`) on the calling thread."""

    def __init__(self) -> None:
        self._conn: _duckdb.DuckDBPyConnection | None = None

    async def connect(self, config: ConnectionConfig) -> None:
        path = config.params.get("path") or ":memory:"
        read_only = config.params.get("read_only", "").lower() in ("1", "true", "yes")
        try:
            self._conn = _duckdb.connect(
                path,
                read_only=read_only,
                config={"custom_user_agent": f"pg_strict/{__version__}"},
            )
        except _duckdb.Error as e:
            raise AdapterError(f"DuckDB connection failed: {e}") from e

    async def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            conn.close()

    def _require(self) -> _duckdb.DuckDBPyConnection:
        if self._conn is None:
            raise AdapterError("Not connected. Call connect() first.")
        return self._conn

    async def execute(
        self, sql: str, *, labels: dict[str, str] | None = None
    ) -> ExecutionResult:
        conn = self._require()
        started = time.monotonic()
        try:
            cursor = conn.execute(label_comment(labels) + sql)
            if cursor.description is None:
                return ExecutionResult.from_tuples([], [], started=started)
            columns = [d[0] for d in cursor.description]
            return ExecutionResult.from_tuples(columns, cursor.fetchall(), started=started)
        except _duckdb.Error as e:
            raise AdapterError(f"DuckDB execution failed: {e}") from e

    def dialect(self) -> str:
        return "duckdb"
