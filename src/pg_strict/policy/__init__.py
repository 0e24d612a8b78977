"""Policy engine: parse, classify, decide, return diagnostics."""

from __future__ import annotations

from loguru import logger

from pg_strict.diagnostics import Diagnostic, DiagnosticResult, codes
from pg_strict.errors import AnalysisBlocked, ParseFailure, PolicyViolation
from pg_strict.policy._types import Operation, StrictMode, violation_message
from pg_strict.policy.analyzer import QueryAnalyzer
from pg_strict.policy.store import PolicyModes, PolicyStore

PRODUCT_TAG = "pg_strict"

_VIOLATION_CODES = {
    Operation.UPDATE: codes.UPDATE_WITHOUT_WHERE,
    Operation.DELETE: codes.DELETE_WITHOUT_WHERE,
}

_TEMPLATES = {
    Operation.UPDATE: "add a WHERE clause: UPDATE ... SET ... WHERE <condition>",
    Operation.DELETE: "add a WHERE clause: DELETE FROM ... WHERE <condition>",
}


def _tagged(message: str, tag: str | None) -> str:
    return f"{tag}: {message}" if tag else message


def decide(
    sql: str,
    modes: PolicyModes,
    *,
    dialect: str | None = None,
    tag: str | None = None,
) -> DiagnosticResult:
    """Decide allow/warn/block for one SQL text under the given modes.

    Steps:
        1. Both modes off: nothing to do, SQL is not even parsed
        2. Parse + classify (parse failure: fail closed if any mode is on,
           otherwise warn that enforcement may be incomplete)
        3. No UPDATE/DELETE: nothing to do
        4. Per statement without WHERE, in source order: off skips, warn adds a
           warning, on adds an error and stops

    Never raises for policy reasons; the result's `blocked` flag carries the
    decision. `tag` prefixes every message (e.g. "pg_strict").
    """
    result = DiagnosticResult(original_sql=sql)

    # Step 1: Fast path
    if modes.all_off:
        return result

    # Step 2: Parse + classify
    try:
        analyzer = QueryAnalyzer(sql, dialect=dialect)
    except ParseFailure as e:
        if modes.any_on:
            result.diagnostics.append(
                Diagnostic.error(
                    codes.ANALYSIS_FAILED,
                    _tagged("could not analyze query, blocking to avoid bypass", tag),
                ).note(f"parser error: {e.detail}")
            )
            result.blocked = True
        else:
            result.diagnostics.append(
                Diagnostic.warning(
                    codes.ANALYSIS_INCOMPLETE,
                    _tagged(
                        "could not analyze query, WHERE clause enforcement "
                        "may be incomplete for this statement",
                        tag,
                    ),
                ).note(f"parser error: {e.detail}")
            )
        return result

    result.statements = list(analyzer.statements)

    # Step 3: Nothing relevant
    if not analyzer.contains_relevant_dml():
        return result

    # Step 4: Per-statement decision
    unfiltered = [s for s in analyzer.statements if not s.has_filter]
    for stmt in unfiltered:
        mode = modes.for_operation(stmt.operation)
        if mode == StrictMode.OFF:
            continue

        message = _tagged(violation_message(stmt.operation), tag)
        if mode == StrictMode.WARN:
            diag = Diagnostic.warning(_VIOLATION_CODES[stmt.operation], message)
        else:
            diag = Diagnostic.error(_VIOLATION_CODES[stmt.operation], message)
        if stmt.table is not None:
            diag.note(f"target table: {stmt.table}")
        diag.suggest_template(_TEMPLATES[stmt.operation])
        result.diagnostics.append(diag)

        if mode == StrictMode.ON:
            result.blocked = True
            break

    return result


def enforce(
    sql: str,
    store: PolicyStore,
    *,
    dialect: str | None = None,
    tag: str | None = PRODUCT_TAG,
) -> DiagnosticResult:
    """Apply the current policy to `sql` before it executes."""
    return apply_decision(decide(sql, store.snapshot(), dialect=dialect, tag=tag))


def apply_decision(result: DiagnosticResult) -> DiagnosticResult:
    """Turn a decision into side effects.

    Warnings are logged and the result is returned. A blocking decision
    raises PolicyViolation (statement without WHERE) or AnalysisBlocked
    (unparseable SQL under an "on" policy).
    """
    for warning in result.warnings:
        logger.warning("{}", warning.message)

    error = result.first_error
    if error is None:
        return result

    if error.code == codes.ANALYSIS_FAILED:
        raise AnalysisBlocked(error.message)
    operation = next(op for op, code in _VIOLATION_CODES.items() if code == error.code)
    raise PolicyViolation(operation, error.message)


__all__ = [
    "PRODUCT_TAG",
    "Operation",
    "PolicyModes",
    "PolicyStore",
    "QueryAnalyzer",
    "StrictMode",
    "apply_decision",
    "decide",
    "enforce",
]
