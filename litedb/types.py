"""Common type definitions for litedb."""

from enum import Enum
from typing import Any, TypeAlias

DatabaseParamType: TypeAlias = dict[str, Any] | list[Any] | tuple[Any, ...] | None


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class StorageType(str, Enum):
    """SQLite column storage classes."""

    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"
    BLOB = "BLOB"


class SortDirection(str, Enum):
    """Ordering direction for queries."""

    ASC = "ASC"
    DESC = "DESC"
