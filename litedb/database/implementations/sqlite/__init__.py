"""SQLite database implementation package."""

from .query_builder import SQLiteQueryBuilder
from .schema_builder import SQLiteSchemaBuilder
from .sqlite_connection import SQLiteConnection, SQLiteTransaction

__all__ = [
    "SQLiteConnection",
    "SQLiteTransaction",
    "SQLiteQueryBuilder",
    "SQLiteSchemaBuilder",
]
