"""The `config` command group and the enable/disable/warn shortcuts."""

from __future__ import annotations

import click

from pg_strict.api import config_rows
from pg_strict.cli._output import format_config
from pg_strict.cli._shared import FORMAT_OPTION, OPERATION_CHOICE, to_operation
from pg_strict.diagnostics import Diagnostic, DiagnosticResult, codes
from pg_strict.diagnostics.render import render_text
from pg_strict.policy._types import StrictMode
from pg_strict.settings import load_store, qualified_name, reset_settings, save_store


@click.group()
def config() -> None:
    """Show and change WHERE clause enforcement modes (~/.pg_strict/settings.toml)."""


@config.command("show")
@FORMAT_OPTION
def config_show(output_format: str) -> None:
    """Show the current mode for UPDATE and DELETE."""
    click.echo(format_config(config_rows(load_store()), output_format=output_format))


@config.command("set")
@click.argument("operation", type=OPERATION_CHOICE)
@click.argument("mode")
def config_set(operation: str, mode: str) -> None:
    """Set the mode (off, warn, on) for one operation.

    \b
    Examples:
      pg-strict config set update on
      pg-strict config set delete warn
    """
    _set_mode(operation, mode)


@config.command("reset")
def config_reset() -> None:
    """Remove persisted settings (both modes back to off)."""
    if reset_settings():
        click.echo("Settings reset; all modes are off.")
    else:
        click.echo("No persisted settings.")


def _set_mode(operation: str, mode: str) -> None:
    op = to_operation(operation)
    store = load_store()
    if not store.set_token(op, mode):
        result = DiagnosticResult(original_sql="", blocked=True)
        result.diagnostics.append(
            Diagnostic.error(codes.INVALID_MODE, f"invalid mode '{mode}'")
            .note(f"setting: {qualified_name(op)}")
            .suggest_template("use 'off', 'warn', or 'on'")
        )
        click.echo(render_text(result), err=True)
        raise SystemExit(1)
    path = save_store(store)
    click.echo(f"{qualified_name(op)} = {store.get(op).value} (saved to {path})")


def _shortcut(name: str, mode: StrictMode, help_text: str) -> click.Command:
    @click.command(name, help=help_text)
    @click.argument("operation", type=OPERATION_CHOICE)
    def command(operation: str) -> None:
        _set_mode(operation, mode.value)

    return command


enable = _shortcut("enable", StrictMode.ON, "Block OPERATION statements without WHERE.")
disable = _shortcut("disable", StrictMode.OFF, "Stop checking OPERATION statements.")
warn = _shortcut("warn", StrictMode.WARN, "Warn about OPERATION statements without WHERE.")
