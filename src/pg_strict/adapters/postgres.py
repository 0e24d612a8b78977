"""PostgreSQL adapter — psycopg async connection in autocommit mode.

Statements carry labels as a leading SQL comment and the session reports
`application_name`, so enforced traffic is identifiable in pg_stat_activity.
"""

from __future__ import annotations

import time

import psycopg

from pg_strict.adapters._base import (
    AdapterError,
    ConnectionConfig,
    ExecutionResult,
    label_comment,
)

DEFAULT_APPLICATION_NAME = "pg_strict"


class PostgresAdapter:
    def __init__(self) -> None:
        self._conn: psycopg.AsyncConnection | None = None

    async def connect(self, config: ConnectionConfig) -> None:
        dsn = config.params.get("dsn")
        if not dsn:
            raise AdapterError("PostgreSQL requires 'dsn' in connection params")
        app_name = config.params.get("application_name", DEFAULT_APPLICATION_NAME)
        try:
            self._conn = await psycopg.AsyncConnection.connect(
                dsn, autocommit=True, application_name=app_name
            )
        except psycopg.Error as e:
            raise AdapterError(f"PostgreSQL connection failed: {e}") from e

    async def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            await conn.close()

    def _require(self) -> psycopg.AsyncConnection:
        if self._conn is None:
            raise AdapterError("Not connected. Call connect() first.")
        return self._conn

    async def execute(
        self, sql: str, *, labels: dict[str, str] | None = None
    ) -> ExecutionResult:
        conn = self._require()
        started = time.monotonic()
        try:
            async with conn.cursor() as cur:
                await cur.execute(label_comment(labels) + sql)
                if cur.description is None:
                    # UPDATE/DELETE without RETURNING: report affected rows.
                    return ExecutionResult.from_tuples(
                        [], [], started=started, affected=cur.rowcount
                    )
                columns = [d.name for d in cur.description]
                return ExecutionResult.from_tuples(
                    columns, await cur.fetchall(), started=started
                )
        except psycopg.Error as e:
            raise AdapterError(f"PostgreSQL execution failed: {e}") from e

    def dialect(self) -> str:
        return "postgres"
