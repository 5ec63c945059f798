"""SQLite-specific query builder implementation."""

from collections.abc import Sequence
from typing import Any

from litedb.database.interfaces.query_builder import QueryBuilder
from litedb.database.predicates import Condition
from litedb.database.utils import (
    build_condition_clause,
    build_limit_clause,
    build_order_by_clause,
    build_where_clause,
    quote_identifier,
)
from litedb.types import DatabaseParamType, SortDirection


class SQLiteQueryBuilder(QueryBuilder):
    """SQLite-specific query builder."""

    def select(
        self,
        table: str,
        columns: list[str] | None = None,
        conditions: Sequence[Condition] = (),
        order_by: Sequence[tuple[str, SortDirection]] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[str, DatabaseParamType]:
        """Build SELECT query for SQLite."""
        cols = "*" if columns is None else ", ".join(map(quote_identifier, columns))
        query = f"SELECT {cols} FROM {quote_identifier(table)}"
        params: dict[str, Any] = {}

        if conditions:
            where_clause, params = build_condition_clause(conditions)
            query += f" {where_clause}"

        if order_by:
            query += f" {build_order_by_clause(order_by)}"

        limit_clause = build_limit_clause(limit, offset)
        if limit_clause:
            query += f" {limit_clause}"

        return query, params

    def insert(self, table: str, data: dict[str, Any]) -> tuple[str, DatabaseParamType]:
        """Build INSERT query for SQLite.

        An empty ``data`` inserts a row of defaults, which is how a record
        holding only an auto-assigned key is written.
        """
        if not data:
            return f"INSERT INTO {quote_identifier(table)} DEFAULT VALUES", {}

        columns = ", ".join(quote_identifier(col) for col in data)
        placeholders = ", ".join(f":{col}" for col in data)
        query = f"INSERT INTO {quote_identifier(table)} ({columns}) VALUES ({placeholders})"

        return query, dict(data)

    def update(
        self, table: str, data: dict[str, Any], where: dict[str, Any]
    ) -> tuple[str, DatabaseParamType]:
        """Build UPDATE query for SQLite."""
        if not data:
            raise ValueError("Cannot update with empty data")
        if not where:
            raise ValueError("Refusing to update without a WHERE clause")

        set_clause = ", ".join(f"{quote_identifier(col)} = :{col}" for col in data)
        where_clause, where_params = build_where_clause(where)
        query = f"UPDATE {quote_identifier(table)} SET {set_clause} {where_clause}"

        params = dict(data)
        params.update(where_params)
        return query, params

    def delete(self, table: str, where: dict[str, Any]) -> tuple[str, DatabaseParamType]:
        """Build DELETE query for SQLite."""
        if not where:
            raise ValueError("Refusing to delete without a WHERE clause")

        where_clause, params = build_where_clause(where)
        return f"DELETE FROM {quote_identifier(table)} {where_clause}", params

    def count(
        self, table: str, conditions: Sequence[Condition] = ()
    ) -> tuple[str, DatabaseParamType]:
        """Build COUNT query for SQLite."""
        query = f"SELECT COUNT(*) AS count FROM {quote_identifier(table)}"
        params: dict[str, Any] = {}

        if conditions:
            where_clause, params = build_condition_clause(conditions)
            query += f" {where_clause}"

        return query, params
