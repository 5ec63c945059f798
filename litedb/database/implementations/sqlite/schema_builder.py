"""SQLite-specific schema builder implementation."""

from litedb.database.interfaces.schema_builder import SchemaBuilder
from litedb.database.utils import quote_identifier
from litedb.models.descriptor import EntityDescriptor, FieldDescriptor
from litedb.types import StorageType


class SQLiteSchemaBuilder(SchemaBuilder):
    """SQLite-specific schema builder."""

    def column_sql(self, column: FieldDescriptor) -> str:
        """Generate the column definition for one field."""
        col_def = f"{quote_identifier(column.name)} {column.type.value}"

        if column.primary_key:
            # SQLite lets non-INTEGER primary keys hold NULL
            if column.type != StorageType.INTEGER:
                col_def += " NOT NULL"
            col_def += " PRIMARY KEY"
            if column.auto_increment:
                col_def += " AUTOINCREMENT"
        elif not column.nullable:
            col_def += " NOT NULL"

        if column.unique and not column.primary_key:
            col_def += " UNIQUE"

        if column.default is not None:
            if isinstance(column.default, str):
                escaped = column.default.replace("'", "''")
                col_def += f" DEFAULT '{escaped}'"
            elif isinstance(column.default, bool):
                col_def += f" DEFAULT {int(column.default)}"
            else:
                col_def += f" DEFAULT {column.default}"

        return col_def

    def create_table_sql(self, entity: EntityDescriptor) -> str:
        """Generate CREATE TABLE SQL for SQLite."""
        columns_sql = ", ".join(self.column_sql(col) for col in entity.fields)
        return f"CREATE TABLE IF NOT EXISTS {quote_identifier(entity.table)} ({columns_sql})"

    def drop_table_sql(self, table_name: str) -> str:
        """Generate DROP TABLE SQL for SQLite."""
        return f"DROP TABLE IF EXISTS {quote_identifier(table_name)}"

    def table_exists_sql(self) -> str:
        return "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?"

    def table_columns_sql(self, table_name: str) -> str:
        return f"PRAGMA table_info({quote_identifier(table_name)})"
