"""Tests for table creation and reset."""

import pytest

from litedb import ConnectionRegistry, SchemaError
from litedb.database import DatabaseHandle, SchemaManager

from tests.shared_test_data import ACCOUNT, USER


@pytest.fixture
def handle(registry: ConnectionRegistry) -> DatabaseHandle:
    """Handle for an empty database."""
    return registry.get_or_create("schema.db")


@pytest.fixture
def schema() -> SchemaManager:
    """Schema manager instance."""
    return SchemaManager()


async def _count(handle: DatabaseHandle, table: str) -> int:
    row = await handle.fetch_one(f'SELECT COUNT(*) AS n FROM "{table}"')
    assert row is not None
    return row["n"]


@pytest.mark.asyncio
async def test_ensure_table_is_idempotent(
    handle: DatabaseHandle, schema: SchemaManager
) -> None:
    """Test ensuring twice creates the table once."""
    assert await schema.ensure_table(handle, USER) is True
    assert await schema.ensure_table(handle, USER) is False

    tables = await handle.fetch_all(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'User'"
    )
    assert len(tables) == 1
    assert await schema.table_exists(handle, USER)
    assert await schema.table_columns(handle, "User") == ["id", "name"]


@pytest.mark.asyncio
async def test_ensure_table_keeps_rows(
    handle: DatabaseHandle, schema: SchemaManager
) -> None:
    """Test ensuring an existing table does not touch its data."""
    await schema.ensure_table(handle, USER)
    await handle.execute("INSERT INTO \"User\" (name) VALUES ('Alice')")

    await schema.ensure_table(handle, USER)

    assert await _count(handle, "User") == 1


@pytest.mark.asyncio
async def test_ensure_table_incompatible(
    handle: DatabaseHandle, schema: SchemaManager
) -> None:
    """Test an existing table with other columns is rejected."""
    await handle.execute('CREATE TABLE "User" (id INTEGER PRIMARY KEY, email TEXT)')

    with pytest.raises(SchemaError, match="has columns"):
        await schema.ensure_table(handle, USER)

    assert USER.record_type not in handle.entities


@pytest.mark.asyncio
async def test_reset_table_empties_populated_table(
    handle: DatabaseHandle, schema: SchemaManager
) -> None:
    """Test reset leaves zero rows."""
    await schema.ensure_table(handle, USER)
    for name in ("Alice", "Bob"):
        await handle.execute('INSERT INTO "User" (name) VALUES (?)', (name,))

    await schema.reset_table(handle, USER)

    assert await _count(handle, "User") == 0


@pytest.mark.asyncio
async def test_reset_table_when_missing(
    handle: DatabaseHandle, schema: SchemaManager
) -> None:
    """Test reset on a database without the table creates it."""
    await schema.reset_table(handle, ACCOUNT)
    await schema.reset_table(handle, ACCOUNT)

    assert await schema.table_exists(handle, ACCOUNT)
    assert await _count(handle, "Account") == 0
    assert handle.entities[ACCOUNT.record_type] is ACCOUNT


@pytest.mark.asyncio
async def test_drop_table(handle: DatabaseHandle, schema: SchemaManager) -> None:
    """Test drop removes the table and tolerates a missing one."""
    await schema.ensure_table(handle, USER)

    await schema.drop_table(handle, USER)
    await schema.drop_table(handle, USER)

    assert not await schema.table_exists(handle, USER)
