"""Database interfaces module."""

from .connection import DatabaseConnection, DatabaseTransaction
from .query_builder import QueryBuilder
from .schema_builder import SchemaBuilder

__all__ = [
    "DatabaseConnection",
    "DatabaseTransaction",
    "QueryBuilder",
    "SchemaBuilder",
]
