"""Per-query aggregation over classified UPDATE/DELETE statements."""

from __future__ import annotations

from collections.abc import Iterable

from pg_strict.policy._types import Operation
from pg_strict.policy.classify import ParsedStatement, classify, parse_statements


class QueryAnalyzer:
    """Classified UPDATE/DELETE statements of one SQL text, in source order.

    Construction parses eagerly and raises ParseFailure on invalid SQL, so an
    empty analyzer always means "no relevant DML".
    """

    def __init__(self, sql: str, *, dialect: str | None = None) -> None:
        self.sql = sql
        self._statements = tuple(classify(parse_statements(sql, dialect=dialect)))

    @classmethod
    def from_statements(
        cls, statements: Iterable[ParsedStatement], *, sql: str = ""
    ) -> QueryAnalyzer:
        analyzer = cls.__new__(cls)
        analyzer.sql = sql
        analyzer._statements = tuple(statements)
        return analyzer

    @property
    def statements(self) -> tuple[ParsedStatement, ...]:
        return self._statements

    def has_filter_for_all_of(self, operation: Operation) -> bool:
        """True only if `operation` occurs at least once and every occurrence has WHERE."""
        matching = [s for s in self._statements if s.operation == operation]
        return bool(matching) and all(s.has_filter for s in matching)

    def missing_filter_operations(self) -> list[Operation]:
        """One entry per statement without WHERE, in source order."""
        return [s.operation for s in self._statements if not s.has_filter]

    def contains_relevant_dml(self) -> bool:
        return bool(self._statements)
