"""Tests for the diagnostic system."""

from pg_strict.diagnostics import Diagnostic, DiagnosticResult, Level, codes
from pg_strict.diagnostics.render import render_json, render_text
from pg_strict.policy._types import Operation
from pg_strict.policy.classify import ParsedStatement


def test_code_format():
    assert str(codes.DELETE_WITHOUT_WHERE) == "Q0201"
    assert str(codes.INVALID_MODE) == "Q0701"


def test_builder_chain():
    diag = (
        Diagnostic.error(codes.DELETE_WITHOUT_WHERE, "DELETE without WHERE")
        .note("target table: orders")
        .suggest_template("add a WHERE clause")
    )
    assert diag.is_blocking
    assert diag.notes == ["target table: orders"]
    assert diag.suggestions[0].message == "add a WHERE clause"


def test_warning_not_blocking():
    assert not Diagnostic.warning(codes.UPDATE_WITHOUT_WHERE, "w").is_blocking


def test_result_accessors():
    result = DiagnosticResult(
        original_sql="x",
        diagnostics=[
            Diagnostic.warning(codes.UPDATE_WITHOUT_WHERE, "first"),
            Diagnostic.error(codes.DELETE_WITHOUT_WHERE, "second"),
        ],
        blocked=True,
    )
    assert [d.message for d in result.warnings] == ["first"]
    assert result.first_error is not None
    assert result.first_error.message == "second"
    assert result.max_level == Level.ERROR


def test_empty_result():
    result = DiagnosticResult(original_sql="SELECT 1")
    assert result.max_level is None
    assert result.first_error is None
    assert not result.blocked


def test_render_text():
    result = DiagnosticResult(
        original_sql="DELETE FROM t",
        diagnostics=[
            Diagnostic.error(codes.DELETE_WITHOUT_WHERE, "DELETE statement without WHERE")
            .note("target table: t")
            .suggest_template("add a WHERE clause")
        ],
        blocked=True,
    )
    assert render_text(result).splitlines() == [
        "error[Q0201]: DELETE statement without WHERE",
        "  = note: target table: t",
        "  = help: add a WHERE clause",
    ]


def test_render_json():
    result = DiagnosticResult(
        original_sql="DELETE FROM t",
        diagnostics=[Diagnostic.warning(codes.DELETE_WITHOUT_WHERE, "m")],
        statements=[ParsedStatement(Operation.DELETE, False, "t")],
    )
    data = render_json(result)
    assert data["blocked"] is False
    assert data["statements"] == [{"operation": "DELETE", "has_where": False, "table": "t"}]
    assert data["diagnostics"][0] == {
        "level": "warning",
        "code": "Q0201",
        "message": "m",
        "notes": [],
    }
