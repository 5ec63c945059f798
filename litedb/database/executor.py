"""Insert, update and delete for single records and atomic batches."""

import sqlite3
from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel

from litedb.exceptions import ConstraintError, NotFoundError, SchemaError
from litedb.log import get_logger
from litedb.models.descriptor import EntityDescriptor

from .handle import DatabaseHandle
from .mapper import EntityMapper
from .predicates import Condition, Operator
from .utils import is_schema_mismatch

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def _as_batch(records: T | Sequence[T]) -> list[T]:
    if isinstance(records, BaseModel):
        return [records]
    return list(records)


class CrudExecutor(Generic[T]):
    """Writes records of one entity type.

    Every call runs in a single transaction, so a batch is written completely
    or not at all. Updates are strict: a record without a key, or whose key
    matches no row, raises :class:`NotFoundError` and reverts the batch.
    Deletes of missing keys are a silent no-op.
    """

    def __init__(self, entity: EntityDescriptor[T]) -> None:
        self.entity = entity
        self.mapper = EntityMapper(entity)

    async def insert(self, handle: DatabaseHandle, records: T | Sequence[T]) -> int:
        """Insert one record or a batch.

        Auto-assigned keys are written back into each record once the whole
        batch has committed; on failure no record is modified.

        Returns:
            Number of rows inserted

        Raises:
            ConstraintError: If a record violates a key or uniqueness
                constraint; ``index`` identifies it within the batch
        """
        batch = _as_batch(records)
        if not batch:
            return 0

        generated: list[tuple[T, int]] = []
        async with handle.transaction():
            for index, record in enumerate(batch):
                self._check_type(record)
                assign_key = not self.entity.has_key(record)
                query, params = handle.query_builder.insert(
                    self.entity.table, self.mapper.to_insert_row(record)
                )
                cursor = await self._write(handle, query, params, record, index)
                if assign_key and self.entity.primary_key.auto_increment:
                    generated.append((record, cursor.lastrowid))

        for record, key in generated:
            self.mapper.assign_key(record, key)

        logger.debug(f"Inserted {len(batch)} rows into {self.entity.table}")
        return len(batch)

    async def update(self, handle: DatabaseHandle, records: T | Sequence[T]) -> int:
        """Update every non-key field of one record or a batch.

        Returns:
            Number of rows updated

        Raises:
            NotFoundError: If a record has no key or its row does not exist
            ConstraintError: If an update violates a uniqueness constraint
        """
        batch = _as_batch(records)
        if not batch:
            return 0

        async with handle.transaction():
            for index, record in enumerate(batch):
                self._check_type(record)
                if not self.entity.has_key(record):
                    raise NotFoundError(
                        f"{self.entity.table} record has no primary key",
                        record=record,
                        index=index,
                    )
                if await self._update_row(handle, record, index) == 0:
                    raise NotFoundError(
                        f"No {self.entity.table} row with key {self.mapper.key_of(record)}",
                        record=record,
                        index=index,
                    )

        logger.debug(f"Updated {len(batch)} rows in {self.entity.table}")
        return len(batch)

    async def delete(self, handle: DatabaseHandle, records: T | Sequence[T]) -> int:
        """Delete the rows of one record or a batch.

        Returns:
            Number of rows actually removed
        """
        batch = _as_batch(records)
        removed = 0
        if not batch:
            return removed

        async with handle.transaction():
            for index, record in enumerate(batch):
                self._check_type(record)
                if not self.entity.has_key(record):
                    continue
                query, params = handle.query_builder.delete(
                    self.entity.table, self.mapper.key_of(record)
                )
                cursor = await self._write(handle, query, params, record, index)
                removed += cursor.rowcount

        logger.debug(f"Deleted {removed} rows from {self.entity.table}")
        return removed

    async def _update_row(self, handle: DatabaseHandle, record: T, index: int) -> int:
        """Write the record's values and return the number of rows matched."""
        key = self.mapper.key_of(record)
        values = self.mapper.to_update_row(record)
        if not values:
            # Nothing to set, so matching the row is the whole update
            conditions = [
                Condition(name, Operator.EQ, value) for name, value in key.items()
            ]
            query, params = handle.query_builder.count(self.entity.table, conditions)
            try:
                row = await handle.fetch_one(query, params)
            except sqlite3.OperationalError as e:
                if is_schema_mismatch(e):
                    raise SchemaError(
                        f"Table {self.entity.table} does not match its descriptor: {e}"
                    ) from e
                raise
            return int(row["count"]) if row else 0

        query, params = handle.query_builder.update(self.entity.table, values, key)
        cursor = await self._write(handle, query, params, record, index)
        return cursor.rowcount

    def _check_type(self, record: object) -> None:
        if not isinstance(record, self.entity.record_type):
            raise TypeError(
                f"Expected {self.entity.record_type.__name__}, "
                f"got {type(record).__name__}"
            )

    async def _write(
        self,
        handle: DatabaseHandle,
        query: str,
        params: dict,
        record: T,
        index: int,
    ) -> sqlite3.Cursor:
        try:
            return await handle.execute(query, params)
        except sqlite3.IntegrityError as e:
            logger.error(f"Constraint violated in {self.entity.table} at {index}: {e}")
            raise ConstraintError(
                f"Constraint violated in {self.entity.table}: {e}",
                record=record,
                index=index,
            ) from e
        except sqlite3.OperationalError as e:
            if is_schema_mismatch(e):
                raise SchemaError(
                    f"Table {self.entity.table} does not match its descriptor: {e}"
                ) from e
            raise
