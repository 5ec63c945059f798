"""Tests for the SQLiteManager entry point."""

from pathlib import Path

import pytest

from litedb import ConnectionRegistry, Settings, SQLiteManager, describe, field

from tests.shared_test_data import PRODUCT, USER, Product, User


def test_get_instance_shares_handle(registry: ConnectionRegistry) -> None:
    """Test managers for one path share the registry handle."""
    first = SQLiteManager.get_instance("users.db", registry)
    second = SQLiteManager.get_instance("users.db", registry)

    assert first.handle is second.handle
    assert first.handle is registry.get_or_create("users.db")


def test_get_instance_uses_empty_registry(test_settings: Settings) -> None:
    """Test a registry with no handles yet still places files in its directory."""
    registry = ConnectionRegistry(test_settings)
    try:
        db = SQLiteManager.get_instance("x.db", registry)

        assert registry.get("x.db") is db.handle
        assert Path(db.handle.db_path).parent == test_settings.database_dir.resolve()
        assert (test_settings.database_dir / "x.db").exists()
    finally:
        registry.close_all()


@pytest.mark.asyncio
async def test_for_queries_path(
    registry: ConnectionRegistry, product_db: SQLiteManager
) -> None:
    """Test for_ starts a query on the named database."""
    await product_db.insert(Product(name="Laptop", price=1200))

    products = await SQLiteManager.for_(PRODUCT, "products.db", registry).to_list()

    assert [p.name for p in products] == ["Laptop"]


@pytest.mark.asyncio
async def test_ensured_descriptor_is_used_for_writes(
    registry: ConnectionRegistry,
) -> None:
    """Test writes use the descriptor the table was ensured with."""
    members = describe(User, table="members")
    db = SQLiteManager.get_instance("members.db", registry)
    await db.ensure_table_exists(members)

    await db.insert(User(name="Alice"))

    assert not await db.table_exists(USER)
    assert [u.name for u in await db.query(members).to_list()] == ["Alice"]


@pytest.mark.asyncio
async def test_explicit_descriptor(registry: ConnectionRegistry) -> None:
    """Test an explicit descriptor overrides the registered one."""
    archive = describe(User, table="archive")
    db = SQLiteManager.get_instance("archive.db", registry)
    await db.ensure_table_exists(USER)
    await db.ensure_table_exists(archive)

    await db.insert(User(name="Old"), entity=USER)

    assert await db.query(USER).count() == 1
    assert await db.query(archive).count() == 0


@pytest.mark.asyncio
async def test_default_descriptor(registry: ConnectionRegistry) -> None:
    """Test records without an ensured table use the model's default descriptor."""
    db = SQLiteManager.get_instance("defaults.db", registry)
    await db.schema.ensure_table(db.handle, describe(Product))
    db.handle.entities.clear()

    product = Product(name="Phone", price=800)
    await db.insert(product)

    assert product.id > 0
    stored = await db.query(PRODUCT).where(field("name") == "Phone").first_or_default()
    assert stored == product


@pytest.mark.asyncio
async def test_drop_table(user_db: SQLiteManager) -> None:
    """Test dropping through the manager."""
    assert await user_db.table_exists(USER)

    await user_db.drop_table(USER)

    assert not await user_db.table_exists(USER)
