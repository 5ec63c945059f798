"""Exceptions raised by the data-access layer."""

from typing import Any


class LiteDBError(Exception):
    """Base exception for litedb errors."""

    pass


class DatabaseConnectionError(LiteDBError):
    """Raised when a database file cannot be opened or created."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Cannot open database {path}: {message}")
        self.path = path


class SchemaError(LiteDBError):
    """Raised when a descriptor is invalid or a table cannot be created."""

    pass


class RecordError(LiteDBError):
    """Base for errors tied to a single record of a batch."""

    def __init__(
        self, message: str, record: Any = None, index: int | None = None
    ) -> None:
        super().__init__(message)
        self.record = record
        self.index = index


class NotFoundError(RecordError):
    """Raised when an update targets a key that does not exist."""

    pass


class ConstraintError(RecordError):
    """Raised when a write violates a uniqueness or key constraint."""

    pass
