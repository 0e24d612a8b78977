"""Classify parsed SQL statements as UPDATE, DELETE, or not relevant."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import sqlglot
from sqlglot import exp

from pg_strict.errors import ParseFailure
from pg_strict.policy._types import Operation
from pg_strict.policy.dialect import resolve_dialect

_OPERATIONS: dict[type[exp.Expression], Operation] = {
    exp.Update: Operation.UPDATE,
    exp.Delete: Operation.DELETE,
}


@dataclass(frozen=True)
class ParsedStatement:
    operation: Operation
    has_filter: bool
    table: str | None = None


def parse_statements(sql: str, *, dialect: str | None = None) -> list[exp.Expression]:
    """Parse SQL into its top-level statements.

    Raises ParseFailure on any tokenizer/parser error, and on an UPDATE/DELETE
    that sqlglot could only keep as an opaque Command (its WHERE slot would be
    invisible to the classifier).
    """
    try:
        statements = sqlglot.parse(sql, dialect=resolve_dialect(dialect))
    except sqlglot.errors.SqlglotError as e:
        raise ParseFailure(sql, str(e)) from e
    except RecursionError as e:
        raise ParseFailure(sql, "statement nested too deeply to analyze") from e

    # Filter out empty expressions (stray or trailing semicolons)
    statements = [s for s in statements if s is not None]

    for statement in statements:
        if isinstance(statement, exp.Command) and str(statement.this).upper() in (
            "UPDATE",
            "DELETE",
        ):
            raise ParseFailure(sql, f"unsupported {str(statement.this).upper()} syntax")
    return statements


def classify_statement(statement: exp.Expression) -> ParsedStatement | None:
    """Extract (operation, has_filter) from one top-level statement.

    Only the statement's own WHERE slot counts. UPDATE ... FROM and
    DELETE ... USING join lists are not filters, and WHERE clauses nested in
    CTEs or subqueries belong to other scopes. `WITH` and `RETURNING` do not
    change the result.
    """
    operation = _OPERATIONS.get(type(statement))
    if operation is None:
        return None

    target = statement.this
    table = _qualified_name(target) if isinstance(target, exp.Table) else None
    return ParsedStatement(
        operation=operation,
        has_filter=statement.args.get("where") is not None,
        table=table,
    )


def classify(statements: Iterable[exp.Expression]) -> list[ParsedStatement]:
    """Classify statements in source order, dropping everything but UPDATE/DELETE."""
    parsed: list[ParsedStatement] = []
    for statement in statements:
        stmt = classify_statement(statement)
        if stmt is not None:
            parsed.append(stmt)
    return parsed


def _qualified_name(table: exp.Table) -> str:
    """Build schema.table or just table name."""
    if table.db:
        return f"{table.db}.{table.name}"
    return table.name
