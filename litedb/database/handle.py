"""Database handle: one shared SQLite connection for one file."""

from pathlib import Path
from typing import Any

from litedb.config import Settings
from litedb.log import get_logger
from litedb.models.descriptor import EntityDescriptor, descriptor_for
from litedb.types import DatabaseParamType

from .implementations.sqlite import (
    SQLiteConnection,
    SQLiteQueryBuilder,
    SQLiteSchemaBuilder,
    SQLiteTransaction,
)

logger = get_logger(__name__)


class DatabaseHandle:
    """Opaque reference to an open SQLite connection for one database file.

    Handles are created by :class:`~litedb.database.registry.ConnectionRegistry`
    and stay open for the registry's lifetime.
    """

    def __init__(self, db_path: Path | str, settings: Settings | None = None) -> None:
        """Initialize the handle without opening it.

        Args:
            db_path: Resolved database file path, or ``:memory:``
            settings: Connection settings
        """
        self.db_path = db_path
        self._connection = SQLiteConnection(db_path, settings)
        self.query_builder = SQLiteQueryBuilder()
        self.schema_builder = SQLiteSchemaBuilder()
        # Descriptors of tables ensured through this handle, by record type
        self.entities: dict[type, EntityDescriptor] = {}

    def open(self) -> None:
        """Open the underlying connection."""
        self._connection.open()

    def close(self) -> None:
        """Close the underlying connection."""
        self._connection.close()

    async def execute(self, query: str, params: DatabaseParamType = None) -> Any:
        return await self._connection.execute(query, params)

    async def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        return await self._connection.fetch_one(query, params)

    async def fetch_all(
        self, query: str, params: DatabaseParamType = None
    ) -> list[dict[str, Any]]:
        return await self._connection.fetch_all(query, params)

    def entity_for(self, record_type: type) -> EntityDescriptor:
        """Descriptor for records of ``record_type`` stored through this handle."""
        entity = self.entities.get(record_type)
        return entity if entity is not None else descriptor_for(record_type)

    def transaction(self) -> SQLiteTransaction:
        """Create a transaction scope for ``async with``."""
        return self._connection.transaction()

    @property
    def connection(self) -> SQLiteConnection:
        """Get database connection."""
        return self._connection

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connection.is_connected

    def __repr__(self) -> str:
        return f"DatabaseHandle({str(self.db_path)!r})"
