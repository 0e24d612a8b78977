"""Root conftest — shared fixtures and markers."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from loguru import logger

_MODE_ENV_VARS = (
    "PG_STRICT_REQUIRE_WHERE_ON_UPDATE",
    "PG_STRICT_REQUIRE_WHERE_ON_DELETE",
)


def pytest_configure(config):
    config.addinivalue_line("markers", "postgres: requires running PostgreSQL container")


def pytest_collection_modifyitems(config, items):
    if os.environ.get("PG_STRICT_TEST_POSTGRES"):
        return

    skip_pg = pytest.mark.skip(reason="Postgres not available (set PG_STRICT_TEST_POSTGRES=1)")
    for item in items:
        if "postgres" in item.keywords:
            item.add_marker(skip_pg)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path):
    """Keep settings and logs out of the real ~/.pg_strict."""
    env = {k: v for k, v in os.environ.items() if k not in _MODE_ENV_VARS}
    with patch("pg_strict.settings._SETTINGS_FILE", tmp_path / "settings.toml"), patch(
        "pg_strict.querylog._LOG_ROOT", tmp_path / "logs"
    ), patch.dict(os.environ, env, clear=True):
        yield tmp_path


@pytest.fixture
def log_warnings():
    """Collect messages logged at WARNING and above."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
