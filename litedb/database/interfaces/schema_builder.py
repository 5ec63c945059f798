"""Abstract schema builder interface for different SQL backends."""

from abc import ABC, abstractmethod

from litedb.models.descriptor import EntityDescriptor


class SchemaBuilder(ABC):
    """Abstract schema builder for different SQL backends."""

    @abstractmethod
    def create_table_sql(self, entity: EntityDescriptor) -> str:
        """Generate CREATE TABLE SQL.

        Args:
            entity: Entity descriptor

        Returns:
            CREATE TABLE SQL statement
        """
        pass

    @abstractmethod
    def drop_table_sql(self, table_name: str) -> str:
        """Generate DROP TABLE SQL.

        Args:
            table_name: Name of the table to drop

        Returns:
            DROP TABLE SQL statement
        """
        pass

    @abstractmethod
    def table_exists_sql(self) -> str:
        """Generate SQL checking whether a named table exists."""
        pass

    @abstractmethod
    def table_columns_sql(self, table_name: str) -> str:
        """Generate SQL listing the columns of a table."""
        pass
