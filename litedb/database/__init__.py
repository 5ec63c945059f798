"""SQLite data-access layer."""

from .executor import CrudExecutor
from .handle import DatabaseHandle
from .manager import SQLiteManager
from .mapper import EntityMapper
from .predicates import Condition, FieldRef, Operator, field
from .query import Query
from .registry import ConnectionRegistry, default_registry
from .schema_manager import SchemaManager

__all__ = [
    "Condition",
    "ConnectionRegistry",
    "CrudExecutor",
    "DatabaseHandle",
    "EntityMapper",
    "FieldRef",
    "Operator",
    "Query",
    "SQLiteManager",
    "SchemaManager",
    "default_registry",
    "field",
]
