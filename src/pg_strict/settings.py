"""Persisted policy settings — ~/.pg_strict/settings.toml plus env overrides."""

from __future__ import annotations

import os
import stat
import tomllib
from pathlib import Path

from loguru import logger

from pg_strict.policy._types import Operation, StrictMode
from pg_strict.policy.store import SETTING_NAMES, PolicyStore

_SETTINGS_FILE = Path.home() / ".pg_strict" / "settings.toml"
_SECTION = "pg_strict"
_ENV_PREFIX = "PG_STRICT_"


def qualified_name(operation: Operation) -> str:
    """e.g. pg_strict.require_where_on_update"""
    return f"{_SECTION}.{SETTING_NAMES[operation]}"


def _escape_toml_value(v: str) -> str:
    """Escape a string for safe inclusion in a TOML double-quoted value."""
    return v.replace("\\", "\\\\").replace('"', '\\"')


def _write_toml(values: dict[str, str]) -> None:
    """Serialize settings to TOML and write with restricted permissions."""
    lines = [f"[{_SECTION}]"]
    for k, v in values.items():
        lines.append(f'{k} = "{_escape_toml_value(v)}"')
    lines.append("")

    _SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    _SETTINGS_FILE.write_text("\n".join(lines))
    os.chmod(_SETTINGS_FILE, stat.S_IRUSR | stat.S_IWUSR)  # 0600


def _load_file() -> dict[str, str]:
    if not _SETTINGS_FILE.exists():
        return {}
    data = tomllib.loads(_SETTINGS_FILE.read_text())
    section = data.get(_SECTION, {})
    return {k: str(v) for k, v in section.items()}


def _apply(store: PolicyStore, operation: Operation, token: str, source: str) -> None:
    mode = StrictMode.from_token(token)
    if mode is None:
        logger.warning(
            "Ignoring invalid {} value '{}' from {}. Use 'off', 'warn', or 'on'.",
            qualified_name(operation), token, source,
        )
        return
    store.set(operation, mode)


def load_store() -> PolicyStore:
    """Build a PolicyStore: defaults (off) → settings file → environment."""
    store = PolicyStore()
    persisted = _load_file()

    for operation, name in SETTING_NAMES.items():
        if name in persisted:
            _apply(store, operation, persisted[name], str(_SETTINGS_FILE))

        env_name = _ENV_PREFIX + name.upper()
        env_value = os.environ.get(env_name)
        if env_value:
            _apply(store, operation, env_value, env_name)

    return store


def save_store(store: PolicyStore) -> Path:
    """Persist both modes to the settings file."""
    values = {name: store.get(op).value for op, name in SETTING_NAMES.items()}
    _write_toml(values)
    return _SETTINGS_FILE


def reset_settings() -> bool:
    """Remove persisted settings. Returns True if a file was removed."""
    if not _SETTINGS_FILE.exists():
        return False
    _SETTINGS_FILE.unlink()
    return True
