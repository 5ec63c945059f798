"""Abstract query builder interface for different SQL backends."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from litedb.database.predicates import Condition
from litedb.types import DatabaseParamType, SortDirection


class QueryBuilder(ABC):
    """Abstract query builder for different SQL backends."""

    @abstractmethod
    def select(
        self,
        table: str,
        columns: list[str] | None = None,
        conditions: Sequence[Condition] = (),
        order_by: Sequence[tuple[str, SortDirection]] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[str, DatabaseParamType]:
        """Build SELECT query.

        Args:
            table: Table name
            columns: List of columns to select (None for all)
            conditions: Conditions joined with AND
            order_by: (column, direction) pairs in priority order
            limit: LIMIT value
            offset: OFFSET value

        Returns:
            Tuple of (query, parameters)
        """
        pass

    @abstractmethod
    def insert(self, table: str, data: dict[str, Any]) -> tuple[str, DatabaseParamType]:
        """Build INSERT query.

        Args:
            table: Table name
            data: Column values to insert

        Returns:
            Tuple of (query, parameters)
        """
        pass

    @abstractmethod
    def update(
        self, table: str, data: dict[str, Any], where: dict[str, Any]
    ) -> tuple[str, DatabaseParamType]:
        """Build UPDATE query.

        Args:
            table: Table name
            data: Column values to set
            where: Equality conditions selecting the rows

        Returns:
            Tuple of (query, parameters)
        """
        pass

    @abstractmethod
    def delete(self, table: str, where: dict[str, Any]) -> tuple[str, DatabaseParamType]:
        """Build DELETE query.

        Args:
            table: Table name
            where: Equality conditions selecting the rows

        Returns:
            Tuple of (query, parameters)
        """
        pass

    @abstractmethod
    def count(
        self, table: str, conditions: Sequence[Condition] = ()
    ) -> tuple[str, DatabaseParamType]:
        """Build COUNT query.

        Args:
            table: Table name
            conditions: Conditions joined with AND

        Returns:
            Tuple of (query, parameters)
        """
        pass
