"""Fluent, immutable queries scoped to one entity type and one database."""

import sqlite3
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from litedb.exceptions import SchemaError
from litedb.log import get_logger
from litedb.models.descriptor import EntityDescriptor
from litedb.types import SortDirection

from .handle import DatabaseHandle
from .mapper import EntityMapper
from .predicates import Condition, Operator
from .utils import is_schema_mismatch

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

RecordFilter = Callable[[Any], bool]

SORT_DIRECTIONS = {
    "asc": SortDirection.ASC,
    "ascending": SortDirection.ASC,
    "desc": SortDirection.DESC,
    "descending": SortDirection.DESC,
}


def _sort_direction(direction: SortDirection | str) -> SortDirection:
    if isinstance(direction, SortDirection):
        return direction
    try:
        return SORT_DIRECTIONS[direction.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown sort direction {direction!r}, "
            f"expected one of {', '.join(SORT_DIRECTIONS)}"
        ) from None


@dataclass(frozen=True)
class Query(Generic[T]):
    """An immutable query value.

    Chaining methods return a new ``Query``; nothing touches the database until
    a terminal method (:meth:`to_list`, :meth:`first_or_default`,
    :meth:`count`) runs, and each terminal call issues exactly one SELECT.

    Repeated :meth:`where` calls are combined with AND. Rows are always
    ordered by the primary key after the explicit ordering, so ties come back
    in insertion order.
    """

    entity: EntityDescriptor[T]
    handle: DatabaseHandle
    conditions: tuple[Condition, ...] = ()
    filters: tuple[RecordFilter, ...] = ()
    ordering: tuple[str, SortDirection] | None = None
    row_limit: int | None = None
    row_offset: int | None = None

    def where(self, *predicates: Condition | RecordFilter, **equals: Any) -> "Query[T]":
        """Restrict results to records matching every predicate.

        Args:
            *predicates: Conditions such as ``field("name") == "Alice"`` or
                ``field("name").contains("Batch")``, translated to SQL; or
                plain callables taking a record, evaluated in Python on the
                fetched records
            **equals: Shorthand for equality conditions

        Raises:
            SchemaError: If a condition names an unknown field
            TypeError: If a predicate is neither a condition nor callable
        """
        conditions = list(self.conditions)
        filters = list(self.filters)

        for predicate in predicates:
            if isinstance(predicate, Condition):
                self._check_condition(predicate)
                conditions.append(predicate)
            elif callable(predicate):
                filters.append(predicate)
            else:
                raise TypeError(f"Unsupported predicate: {predicate!r}")

        for name, value in equals.items():
            condition = Condition(name, Operator.EQ, value)
            self._check_condition(condition)
            conditions.append(condition)

        return replace(self, conditions=tuple(conditions), filters=tuple(filters))

    def order_by(
        self, field_name: str, direction: SortDirection | str = SortDirection.ASC
    ) -> "Query[T]":
        """Sort by a single field; replaces any earlier ordering.

        ``direction`` is a :class:`SortDirection` or one of ``"asc"``,
        ``"ascending"``, ``"desc"``, ``"descending"`` in any case.
        """
        self.entity.get_field(field_name)
        return replace(self, ordering=(field_name, _sort_direction(direction)))

    def order_by_descending(self, field_name: str) -> "Query[T]":
        return self.order_by(field_name, SortDirection.DESC)

    def limit(self, count: int) -> "Query[T]":
        if count < 0:
            raise ValueError("limit must be non-negative")
        return replace(self, row_limit=count)

    def offset(self, count: int) -> "Query[T]":
        if count < 0:
            raise ValueError("offset must be non-negative")
        return replace(self, row_offset=count)

    async def to_list(self) -> list[T]:
        """Execute the query and return the materialized records."""
        # Python-side filters must see every row before paging applies
        push_paging = not self.filters
        query, params = self.handle.query_builder.select(
            self.entity.table,
            columns=self.entity.column_names,
            conditions=self.conditions,
            order_by=self._order_terms(),
            limit=self.row_limit if push_paging else None,
            offset=self.row_offset if push_paging else None,
        )
        rows = await self._fetch_all(query, params)

        mapper = EntityMapper(self.entity)
        records = [mapper.from_row(row) for row in rows]

        if not push_paging:
            records = [r for r in records if all(f(r) for f in self.filters)]
            start = self.row_offset or 0
            stop = None if self.row_limit is None else start + self.row_limit
            records = records[start:stop]

        logger.debug(f"Query on {self.entity.table} returned {len(records)} records")
        return records

    async def first_or_default(self) -> T | None:
        """Return the first matching record, or None when nothing matches."""
        query = self
        if not self.filters:
            limit = 1 if self.row_limit is None else min(self.row_limit, 1)
            query = replace(self, row_limit=limit)
        records = await query.to_list()
        return records[0] if records else None

    async def count(self) -> int:
        """Return the number of matching records."""
        if self.filters or self.row_limit is not None or self.row_offset is not None:
            return len(await self.to_list())

        query, params = self.handle.query_builder.count(
            self.entity.table, self.conditions
        )
        rows = await self._fetch_all(query, params)
        return int(rows[0]["count"])

    def _check_condition(self, condition: Condition) -> None:
        self.entity.get_field(condition.column)
        if condition.operator == Operator.CONTAINS and not isinstance(
            condition.value, str
        ):
            raise TypeError(f"contains() needs a string, got {condition.value!r}")

    def _order_terms(self) -> list[tuple[str, SortDirection]]:
        key = self.entity.primary_key.name
        terms: list[tuple[str, SortDirection]] = []
        if self.ordering is not None:
            terms.append(self.ordering)
        if self.ordering is None or self.ordering[0] != key:
            terms.append((key, SortDirection.ASC))
        return terms

    async def _fetch_all(self, query: str, params: Any) -> list[dict[str, Any]]:
        try:
            return await self.handle.fetch_all(query, params)
        except sqlite3.OperationalError as e:
            if is_schema_mismatch(e):
                raise SchemaError(
                    f"Table {self.entity.table} does not match its descriptor: {e}"
                ) from e
            raise
