"""Database connection interface."""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

from litedb.types import DatabaseParamType


class DatabaseConnection(ABC):
    """Abstract open/execute/query driver interface."""

    @abstractmethod
    def open(self) -> None:
        """Open the underlying storage connection."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the underlying storage connection."""
        pass

    @abstractmethod
    async def execute(self, query: str, params: DatabaseParamType = None) -> Any:
        """Execute a statement.

        Args:
            query: SQL statement
            params: Statement parameters

        Returns:
            Driver cursor
        """
        pass

    @abstractmethod
    async def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        """Fetch single row.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            Single row as dictionary or None if not found
        """
        pass

    @abstractmethod
    async def fetch_all(
        self, query: str, params: DatabaseParamType = None
    ) -> list[dict[str, Any]]:
        """Fetch all rows.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            List of rows as dictionaries
        """
        pass

    @abstractmethod
    def transaction(self) -> "DatabaseTransaction":
        """Create a transaction scope for use with ``async with``."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if connection is active."""
        pass


class DatabaseTransaction(ABC):
    """Abstract transaction scope: commit on success, rollback on any error."""

    @abstractmethod
    async def begin(self) -> None:
        """Begin the transaction."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the transaction."""
        pass

    async def __aenter__(self) -> "DatabaseTransaction":
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()
