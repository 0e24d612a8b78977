"""Diagnostic system: types, codes, and rendering."""

from pg_strict.diagnostics.codes import DiagnosticCode
from pg_strict.diagnostics.types import (
    Diagnostic,
    DiagnosticResult,
    Level,
    Suggestion,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticResult",
    "Level",
    "Suggestion",
]
