"""Test lazy adapter registry."""

from pg_strict.adapters._base import AdapterError, DatabaseType
from pg_strict.adapters._registry import _ADAPTERS, get_adapter


def test_get_duckdb_adapter():
    cls = get_adapter(DatabaseType.DUCKDB)
    assert cls.__name__ == "DuckDBAdapter"


def test_get_postgres_adapter():
    """Postgres adapter class can be loaded (psycopg may or may not be installed)."""
    try:
        cls = get_adapter(DatabaseType.POSTGRES)
        assert cls.__name__ == "PostgresAdapter"
    except AdapterError as e:
        assert "Missing driver" in str(e)
        assert "pg-strict[postgres]" in str(e)


def test_every_database_type_registered():
    assert set(_ADAPTERS) == set(DatabaseType)
