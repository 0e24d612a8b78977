"""Operator entry points: inspect statements, validate them, read/set modes."""

from __future__ import annotations

from typing import NamedTuple

from pg_strict import __version__
from pg_strict.errors import ParseFailure, PolicyViolation
from pg_strict.policy._types import Operation, StrictMode, violation_message
from pg_strict.policy.analyzer import QueryAnalyzer
from pg_strict.policy.store import SETTING_DESCRIPTIONS, SETTING_NAMES, PolicyStore


class ConfigRow(NamedTuple):
    setting: str
    current_value: str
    description: str


def version() -> str:
    return __version__


def check_where_clause(sql: str, stmt_type: str, *, dialect: str | None = None) -> bool:
    """True if every `stmt_type` statement in `sql` has a WHERE clause.

    False when there is no such statement, when `stmt_type` is not
    update/delete, or when `sql` does not parse.
    """
    operation = Operation.from_token(stmt_type)
    if operation is None:
        return False

    try:
        analyzer = QueryAnalyzer(sql, dialect=dialect)
    except ParseFailure:
        return False
    return analyzer.has_filter_for_all_of(operation)


def _validate(sql: str, operation: Operation, dialect: str | None) -> bool:
    try:
        analyzer = QueryAnalyzer(sql, dialect=dialect)
    except ParseFailure as e:
        raise ParseFailure(sql, f"Failed to parse {operation.value} query.") from e

    if not analyzer.has_filter_for_all_of(operation):
        raise PolicyViolation(operation, violation_message(operation))
    return True


def validate_update(sql: str, *, dialect: str | None = None) -> bool:
    """Raise PolicyViolation unless every UPDATE in `sql` has a WHERE clause."""
    return _validate(sql, Operation.UPDATE, dialect)


def validate_delete(sql: str, *, dialect: str | None = None) -> bool:
    """Raise PolicyViolation unless every DELETE in `sql` has a WHERE clause."""
    return _validate(sql, Operation.DELETE, dialect)


def config_rows(store: PolicyStore) -> list[ConfigRow]:
    return [
        ConfigRow(
            setting=SETTING_NAMES[op],
            current_value=store.get(op).value,
            description=SETTING_DESCRIPTIONS[op],
        )
        for op in (Operation.UPDATE, Operation.DELETE)
    ]


def set_update_mode(store: PolicyStore, mode: str) -> bool:
    return store.set_token(Operation.UPDATE, mode)


def set_delete_mode(store: PolicyStore, mode: str) -> bool:
    return store.set_token(Operation.DELETE, mode)


def enable_update(store: PolicyStore) -> bool:
    return set_update_mode(store, StrictMode.ON.value)


def enable_delete(store: PolicyStore) -> bool:
    return set_delete_mode(store, StrictMode.ON.value)


def disable_update(store: PolicyStore) -> bool:
    return set_update_mode(store, StrictMode.OFF.value)


def disable_delete(store: PolicyStore) -> bool:
    return set_delete_mode(store, StrictMode.OFF.value)


def warn_update(store: PolicyStore) -> bool:
    return set_update_mode(store, StrictMode.WARN.value)


def warn_delete(store: PolicyStore) -> bool:
    return set_delete_mode(store, StrictMode.WARN.value)
