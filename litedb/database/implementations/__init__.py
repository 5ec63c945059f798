"""Database implementations package."""

from .sqlite import (
    SQLiteConnection,
    SQLiteQueryBuilder,
    SQLiteSchemaBuilder,
    SQLiteTransaction,
)

__all__ = [
    "SQLiteConnection",
    "SQLiteTransaction",
    "SQLiteQueryBuilder",
    "SQLiteSchemaBuilder",
]
