"""Internal types for the policy engine."""

from __future__ import annotations

import enum


class Operation(enum.Enum):
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    @classmethod
    def from_token(cls, token: str) -> Operation | None:
        """Case-insensitive lookup; returns None for anything but update/delete."""
        return _OPERATION_TOKENS.get(token.strip().lower())


class StrictMode(enum.Enum):
    OFF = "off"
    WARN = "warn"
    ON = "on"

    @classmethod
    def from_token(cls, token: str) -> StrictMode | None:
        """Case-insensitive lookup; returns None for anything but off/warn/on."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None


_OPERATION_TOKENS = {
    "update": Operation.UPDATE,
    "delete": Operation.DELETE,
}


def violation_message(operation: Operation) -> str:
    return (
        f"{operation.value} statement without WHERE clause detected. "
        "This operation would affect all rows in the table."
    )
