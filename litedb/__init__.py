"""Asynchronous data-access layer over SQLite files."""

from .config import Settings, load_settings, settings
from .database import (
    ConnectionRegistry,
    DatabaseHandle,
    Query,
    SQLiteManager,
    default_registry,
    field,
)
from .exceptions import (
    ConstraintError,
    DatabaseConnectionError,
    LiteDBError,
    NotFoundError,
    SchemaError,
)
from .log import (
    get_logger,
    setup_logging,
    setup_test_logging,
)
from .models import EntityDescriptor, FieldDescriptor, describe, descriptor_for
from .types import Environment, SortDirection, StorageType

__all__ = [
    "ConnectionRegistry",
    "ConstraintError",
    "DatabaseConnectionError",
    "DatabaseHandle",
    "EntityDescriptor",
    "Environment",
    "FieldDescriptor",
    "LiteDBError",
    "NotFoundError",
    "Query",
    "SQLiteManager",
    "SchemaError",
    "Settings",
    "SortDirection",
    "StorageType",
    "default_registry",
    "describe",
    "descriptor_for",
    "field",
    "get_logger",
    "load_settings",
    "settings",
    "setup_logging",
    "setup_test_logging",
]
