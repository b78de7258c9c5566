"""Error types raised by the typing leaderboard service."""

from typing import Any


class InvalidMetricError(ValueError):
    """A submitted value or query parameter is outside its allowed range."""

    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid value for {field}: {value!r}")


class StorageUnavailableError(RuntimeError):
    """The result store could not complete an operation."""
