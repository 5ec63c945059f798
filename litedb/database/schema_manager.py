"""Table creation, validation and reset for entity descriptors."""

import sqlite3

from litedb.exceptions import SchemaError
from litedb.log import get_logger
from litedb.models.descriptor import EntityDescriptor

from .handle import DatabaseHandle

logger = get_logger(__name__)


class SchemaManager:
    """Ensures tables exist in the shape an entity descriptor declares."""

    async def table_exists(self, handle: DatabaseHandle, entity: EntityDescriptor) -> bool:
        row = await handle.fetch_one(handle.schema_builder.table_exists_sql(), (entity.table,))
        return row is not None

    async def table_columns(self, handle: DatabaseHandle, table: str) -> list[str]:
        """Return the column names of ``table`` (empty if it does not exist)."""
        rows = await handle.fetch_all(handle.schema_builder.table_columns_sql(table))
        return [row["name"] for row in rows]

    async def ensure_table(self, handle: DatabaseHandle, entity: EntityDescriptor) -> bool:
        """Create the entity's table if it does not exist.

        Args:
            handle: Target database
            entity: Entity descriptor

        Returns:
            True if the table was created, False if it already existed

        Raises:
            SchemaError: If an existing table has a different column set, or
                the CREATE TABLE statement fails
        """
        existing = await self.table_columns(handle, entity.table)
        if existing:
            if set(existing) != set(entity.column_names):
                raise SchemaError(
                    f"Table {entity.table} has columns {sorted(existing)}, "
                    f"expected {sorted(entity.column_names)}"
                )
            handle.entities[entity.record_type] = entity
            logger.debug(f"Table {entity.table} already exists in {handle.db_path}")
            return False

        await self._create(handle, entity)
        handle.entities[entity.record_type] = entity
        return True

    async def reset_table(self, handle: DatabaseHandle, entity: EntityDescriptor) -> None:
        """Drop the entity's table if present and recreate it empty."""
        async with handle.transaction():
            await self._drop(handle, entity)
            await self._create(handle, entity)
        handle.entities[entity.record_type] = entity
        logger.info(f"Reset table {entity.table} in {handle.db_path}")

    async def drop_table(self, handle: DatabaseHandle, entity: EntityDescriptor) -> None:
        """Drop the entity's table; a missing table is not an error."""
        await self._drop(handle, entity)
        logger.info(f"Dropped table {entity.table} in {handle.db_path}")

    async def _create(self, handle: DatabaseHandle, entity: EntityDescriptor) -> None:
        sql = handle.schema_builder.create_table_sql(entity)
        try:
            await handle.execute(sql)
        except sqlite3.Error as e:
            logger.error(f"Failed to create table {entity.table}: {e}")
            raise SchemaError(f"Cannot create table {entity.table}: {e}") from e
        logger.info(f"Created table {entity.table} in {handle.db_path}")

    async def _drop(self, handle: DatabaseHandle, entity: EntityDescriptor) -> None:
        try:
            await handle.execute(handle.schema_builder.drop_table_sql(entity.table))
        except sqlite3.Error as e:
            logger.error(f"Failed to drop table {entity.table}: {e}")
            raise SchemaError(f"Cannot drop table {entity.table}: {e}") from e
