"""Compiler-style diagnostics for WHERE clause enforcement.

Every decision the enforcement engine makes is expressed as Diagnostic values.
Warnings let execution proceed, errors block it; all diagnostics are returned
to the caller so the decision can be rendered, logged, or raised.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pg_strict.diagnostics.codes import DiagnosticCode

if TYPE_CHECKING:
    from pg_strict.policy.classify import ParsedStatement


class Level(enum.IntEnum):
    WARNING = 1
    ERROR = 2


@dataclass
class Suggestion:
    message: str


@dataclass
class Diagnostic:
    level: Level
    code: DiagnosticCode
    message: str
    notes: list[str] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)

    # -- Builder classmethods ---------------------------------------------------

    @classmethod
    def error(cls, code: DiagnosticCode, message: str) -> Diagnostic:
        return cls(level=Level.ERROR, code=code, message=message)

    @classmethod
    def warning(cls, code: DiagnosticCode, message: str) -> Diagnostic:
        return cls(level=Level.WARNING, code=code, message=message)

    # -- Builder chain methods --------------------------------------------------

    def note(self, note: str) -> Diagnostic:
        self.notes.append(note)
        return self

    def suggest_template(self, message: str) -> Diagnostic:
        self.suggestions.append(Suggestion(message=message))
        return self

    # -- Query methods ----------------------------------------------------------

    @property
    def is_blocking(self) -> bool:
        return self.level == Level.ERROR


@dataclass
class DiagnosticResult:
    original_sql: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    blocked: bool = False
    statements: list[ParsedStatement] = field(default_factory=list)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == Level.WARNING]

    @property
    def first_error(self) -> Diagnostic | None:
        return next((d for d in self.diagnostics if d.is_blocking), None)

    @property
    def max_level(self) -> Level | None:
        if not self.diagnostics:
            return None
        return max(d.level for d in self.diagnostics)
