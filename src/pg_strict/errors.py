"""Exceptions raised by the enforcement engine and its entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pg_strict.policy._types import Operation


class StrictError(Exception):
    """Base class for pg_strict errors."""


class ParseFailure(StrictError):
    """The SQL text could not be parsed, so nothing could be classified."""

    def __init__(self, sql: str, detail: str) -> None:
        super().__init__(detail)
        self.sql = sql
        self.detail = detail


class PolicyViolation(StrictError):
    """An UPDATE/DELETE lacks a WHERE clause under a blocking policy."""

    def __init__(self, operation: Operation, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.message = message


class AnalysisBlocked(StrictError):
    """The query could not be analyzed while a blocking policy is active."""


class HookChainError(StrictError):
    """Invalid manipulation of an interceptor chain."""
