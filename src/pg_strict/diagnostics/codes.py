"""Stable, searchable error code registry.

Ranges:
- Q02xx      — WHERE clause enforcement
- Q07xx      — Configuration
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiagnosticCode:
    value: int

    def __str__(self) -> str:
        return f"Q{self.value:04d}"


# WHERE clause enforcement (Q02xx)
DELETE_WITHOUT_WHERE = DiagnosticCode(201)
UPDATE_WITHOUT_WHERE = DiagnosticCode(203)
ANALYSIS_FAILED = DiagnosticCode(206)
ANALYSIS_INCOMPLETE = DiagnosticCode(207)

# Configuration (Q07xx)
INVALID_MODE = DiagnosticCode(701)
