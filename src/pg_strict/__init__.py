"""pg_strict: block or warn on UPDATE/DELETE statements without a WHERE clause."""

__version__ = "0.1.0"
