"""Enforcement log — one JSONL line per executed or refused query.

Files live under ~/.pg_strict/logs/<project-slug>/YYYY-MM-DD.jsonl, where the
slug is the working directory with '/' replaced by '-'. Files older than the
retention window are removed by cleanup_old_logs().
"""

from __future__ import annotations

import contextlib
import json
import os
from dataclasses import asdict, dataclass, field
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

DEFAULT_RETENTION_DAYS = 30
_LOG_ROOT = Path.home() / ".pg_strict" / "logs"
_DATE_FORMAT = "%Y-%m-%d"


@dataclass
class QueryLogEntry:
    sql: str
    decision: str  # allow | warn | deny | error
    db: str | None = None
    dialect: str | None = None
    operations: list[str] = field(default_factory=list)
    tables: list[str] = field(default_factory=list)
    modes: dict[str, str] = field(default_factory=dict)
    diagnostics: list[str] = field(default_factory=list)
    duration_ms: float | None = None
    error: str | None = None
    ts: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @property
    def blocked(self) -> bool:
        return self.decision == "deny"

    def to_json(self) -> str:
        data = asdict(self)
        data["blocked"] = self.blocked
        return json.dumps(data, default=str)


def _project_slug() -> str:
    return os.getcwd().replace("/", "-").lstrip("-")


def _project_dir() -> Path:
    return _LOG_ROOT / _project_slug()


def log_query(**fields) -> QueryLogEntry:
    """Append an entry built from `fields` to today's file and return it."""
    entry = QueryLogEntry(**fields)
    path = _project_dir() / f"{datetime.now(UTC).strftime(_DATE_FORMAT)}.jsonl"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a") as f:
        f.write(entry.to_json() + "\n")
    return entry


def _file_date(path: Path) -> date | None:
    try:
        return datetime.strptime(path.stem, _DATE_FORMAT).date()
    except ValueError:
        return None


def cleanup_old_logs(*, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
    """Delete this project's log files older than `retention_days`; return how many."""
    project_dir = _project_dir()
    if not project_dir.is_dir():
        return 0

    cutoff = datetime.now(UTC).date() - timedelta(days=retention_days)
    expired = []
    for path in project_dir.glob("*.jsonl"):
        file_date = _file_date(path)
        if file_date is not None and file_date < cutoff:
            expired.append(path)
    for path in expired:
        path.unlink()

    # Only succeeds once the directory is empty.
    with contextlib.suppress(OSError):
        project_dir.rmdir()
    return len(expired)
