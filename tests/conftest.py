"""Global pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
import pytest_asyncio

from litedb import (
    ConnectionRegistry,
    Environment,
    Settings,
    SQLiteManager,
    setup_test_logging,
)

from tests.shared_test_data import PRODUCT, USER, Product, User


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings that resolve relative database paths inside tmp_path."""
    return Settings(environment=Environment.TESTING, database_dir=tmp_path)


@pytest.fixture
def registry(test_settings: Settings) -> Generator[ConnectionRegistry, None, None]:
    """Registry closed after each test."""
    registry = ConnectionRegistry(test_settings)
    yield registry
    registry.close_all()


@pytest_asyncio.fixture
async def user_db(registry: ConnectionRegistry) -> AsyncGenerator[SQLiteManager, None]:
    """Manager for users.db with an empty User table."""
    manager = SQLiteManager.get_instance("users.db", registry)
    await manager.reset_table(USER)
    yield manager


@pytest_asyncio.fixture
async def product_db(
    registry: ConnectionRegistry,
) -> AsyncGenerator[SQLiteManager, None]:
    """Manager for products.db with an empty Product table."""
    manager = SQLiteManager.get_instance("products.db", registry)
    await manager.reset_table(PRODUCT)
    yield manager


@pytest.fixture
def sample_users() -> list[User]:
    """Unsaved users."""
    return [User(name="Alice"), User(name="Bob"), User(name="Charlie")]


@pytest.fixture
def sample_products() -> list[Product]:
    """Unsaved products."""
    return [
        Product(name="Laptop", price=1200),
        Product(name="Phone", price=800),
        Product(name="Tablet", price=600),
    ]
