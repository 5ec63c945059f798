"""Entry point tying the registry, schema manager, executor and queries together."""

from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel

from litedb.models.descriptor import EntityDescriptor

from .executor import CrudExecutor
from .handle import DatabaseHandle
from .query import Query
from .registry import ConnectionRegistry, default_registry
from .schema_manager import SchemaManager

T = TypeVar("T", bound=BaseModel)


class SQLiteManager:
    """Data-access operations against one database file.

    Writes find the descriptor for a record from its type: the descriptor
    last passed to :meth:`ensure_table_exists` or :meth:`reset_table` on the
    same database, otherwise the default one derived from the model.

    Example:
        >>> users = SQLiteManager.get_instance("users.db")
        >>> await users.ensure_table_exists(USER)
        >>> await users.insert(User(name="Alice"))
        >>> await users.query(USER).where(field("name") == "Alice").first_or_default()
    """

    def __init__(self, handle: DatabaseHandle) -> None:
        self.handle = handle
        self.schema = SchemaManager()

    @classmethod
    def get_instance(
        cls, path: str | Path, registry: ConnectionRegistry | None = None
    ) -> "SQLiteManager":
        """Manager for ``path`` backed by the registry's shared handle."""
        if registry is None:
            registry = default_registry()
        return cls(registry.get_or_create(path))

    @classmethod
    def for_(
        cls,
        entity: EntityDescriptor[T],
        path: str | Path,
        registry: ConnectionRegistry | None = None,
    ) -> Query[T]:
        """Start a query for ``entity`` on the database at ``path``."""
        return cls.get_instance(path, registry).query(entity)

    async def ensure_table_exists(self, entity: EntityDescriptor) -> bool:
        return await self.schema.ensure_table(self.handle, entity)

    async def reset_table(self, entity: EntityDescriptor) -> None:
        await self.schema.reset_table(self.handle, entity)

    async def drop_table(self, entity: EntityDescriptor) -> None:
        await self.schema.drop_table(self.handle, entity)

    async def table_exists(self, entity: EntityDescriptor) -> bool:
        return await self.schema.table_exists(self.handle, entity)

    async def insert(
        self, records: T | Sequence[T], entity: EntityDescriptor[T] | None = None
    ) -> int:
        """Insert a record or a batch; see :meth:`CrudExecutor.insert`."""
        executor = self._executor(records, entity)
        return await executor.insert(self.handle, records) if executor else 0

    async def update(
        self, records: T | Sequence[T], entity: EntityDescriptor[T] | None = None
    ) -> int:
        """Update a record or a batch; see :meth:`CrudExecutor.update`."""
        executor = self._executor(records, entity)
        return await executor.update(self.handle, records) if executor else 0

    async def delete(
        self, records: T | Sequence[T], entity: EntityDescriptor[T] | None = None
    ) -> int:
        """Delete a record or a batch; see :meth:`CrudExecutor.delete`."""
        executor = self._executor(records, entity)
        return await executor.delete(self.handle, records) if executor else 0

    def query(self, entity: EntityDescriptor[T]) -> Query[T]:
        return Query(entity, self.handle)

    def _executor(
        self,
        records: T | Sequence[T],
        entity: EntityDescriptor[T] | None,
    ) -> CrudExecutor[T] | None:
        if entity is None:
            if isinstance(records, BaseModel):
                sample: BaseModel | None = records
            else:
                sample = next(iter(records), None)
            if sample is None:
                return None
            entity = self.handle.entity_for(type(sample))
        return CrudExecutor(entity)
