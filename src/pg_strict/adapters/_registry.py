"""Driver lookup by database type; driver modules are imported on first use."""

from __future__ import annotations

import importlib

from pg_strict.adapters._base import AdapterError, DatabaseAdapter, DatabaseType

# db type -> (module, class, pip extra that provides the driver)
_ADAPTERS: dict[DatabaseType, tuple[str, str, str]] = {
    DatabaseType.POSTGRES: ("pg_strict.adapters.postgres", "PostgresAdapter", "postgres"),
    DatabaseType.DUCKDB: ("pg_strict.adapters.duckdb", "DuckDBAdapter", "duckdb"),
}


def get_adapter(db_type: DatabaseType) -> type[DatabaseAdapter]:
    """Return the adapter class for `db_type`.

    A missing driver surfaces as AdapterError naming the extra to install.
    """
    try:
        module_path, class_name, extra = _ADAPTERS[db_type]
    except KeyError:
        raise AdapterError(f"No adapter registered for {db_type.value}") from None

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise AdapterError(
            f"Missing driver for {db_type.value}. "
            f"Install with: pip install 'pg-strict[{extra}]'"
        ) from e
    return getattr(module, class_name)
