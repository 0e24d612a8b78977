"""Process-wide policy modes, one per operation."""

from __future__ import annotations

import threading
from typing import NamedTuple

from loguru import logger

from pg_strict.policy._types import Operation, StrictMode

SETTING_NAMES: dict[Operation, str] = {
    Operation.UPDATE: "require_where_on_update",
    Operation.DELETE: "require_where_on_delete",
}

SETTING_DESCRIPTIONS: dict[Operation, str] = {
    Operation.UPDATE: "Require WHERE clause on UPDATE statements",
    Operation.DELETE: "Require WHERE clause on DELETE statements",
}


class PolicyModes(NamedTuple):
    """Snapshot of both modes, read once per decision."""

    update: StrictMode = StrictMode.OFF
    delete: StrictMode = StrictMode.OFF

    def for_operation(self, operation: Operation) -> StrictMode:
        return self.update if operation == Operation.UPDATE else self.delete

    @property
    def all_off(self) -> bool:
        return self.update == StrictMode.OFF and self.delete == StrictMode.OFF

    @property
    def any_on(self) -> bool:
        return StrictMode.ON in (self.update, self.delete)


class PolicyStore:
    """Holds the two modes.

    Each read is a single reference lookup, so readers see either the old or
    the new mode. Writers are serialised; the two operations are not updated
    atomically relative to each other.
    """

    def __init__(
        self,
        update: StrictMode = StrictMode.OFF,
        delete: StrictMode = StrictMode.OFF,
    ) -> None:
        self._modes = {Operation.UPDATE: update, Operation.DELETE: delete}
        self._lock = threading.Lock()

    def get(self, operation: Operation) -> StrictMode:
        return self._modes[operation]

    def set(self, operation: Operation, mode: StrictMode) -> None:
        with self._lock:
            self._modes[operation] = mode

    def set_token(self, operation: Operation, token: str) -> bool:
        """Set a mode from user input. Invalid tokens leave the value unchanged."""
        mode = StrictMode.from_token(token)
        if mode is None:
            logger.warning("Invalid mode '{}'. Use 'off', 'warn', or 'on'.", token)
            return False
        self.set(operation, mode)
        return True

    def snapshot(self) -> PolicyModes:
        return PolicyModes(
            update=self.get(Operation.UPDATE),
            delete=self.get(Operation.DELETE),
        )
