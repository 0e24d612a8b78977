"""Test the config command group and the enable/disable/warn shortcuts."""

import json

from click.testing import CliRunner

from pg_strict.cli import main
from pg_strict.policy._types import Operation, StrictMode
from pg_strict.settings import load_store


def test_show_defaults() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["config", "show", "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [(row["setting"], row["current_value"]) for row in data] == [
        ("require_where_on_update", "off"),
        ("require_where_on_delete", "off"),
    ]
    assert all(row["description"] for row in data)


def test_show_text() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["config", "show"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0].startswith("require_where_on_update")
    assert lines[1].startswith("require_where_on_delete")


def test_set_persists() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["config", "set", "delete", "WARN"])
    assert result.exit_code == 0
    assert result.stdout.startswith("pg_strict.require_where_on_delete = warn")
    assert load_store().get(Operation.DELETE) == StrictMode.WARN
    assert load_store().get(Operation.UPDATE) == StrictMode.OFF


def test_set_invalid_mode() -> None:
    runner = CliRunner()
    runner.invoke(main, ["config", "set", "update", "on"])
    result = runner.invoke(main, ["config", "set", "update", "enabled"])
    assert result.exit_code == 1
    assert "error[Q0701]: invalid mode 'enabled'" in result.stderr
    assert load_store().get(Operation.UPDATE) == StrictMode.ON


def test_shortcuts() -> None:
    runner = CliRunner()
    assert runner.invoke(main, ["enable", "update"]).exit_code == 0
    assert runner.invoke(main, ["warn", "delete"]).exit_code == 0
    store = load_store()
    assert store.get(Operation.UPDATE) == StrictMode.ON
    assert store.get(Operation.DELETE) == StrictMode.WARN

    assert runner.invoke(main, ["disable", "update"]).exit_code == 0
    assert load_store().get(Operation.UPDATE) == StrictMode.OFF


def test_shortcut_rejects_unknown_operation() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["enable", "insert"])
    assert result.exit_code == 2


def test_reset() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["config", "reset"])
    assert "No persisted settings." in result.stdout

    runner.invoke(main, ["enable", "delete"])
    result = runner.invoke(main, ["config", "reset"])
    assert result.exit_code == 0
    assert load_store().get(Operation.DELETE) == StrictMode.OFF
