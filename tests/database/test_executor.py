"""Tests for insert, update and delete."""

import asyncio

import pytest
import pytest_asyncio

from litedb import (
    ConnectionRegistry,
    ConstraintError,
    NotFoundError,
    SQLiteManager,
    field,
)
from litedb.database import CrudExecutor

from tests.shared_test_data import (
    ACCOUNT,
    SETTING,
    TAG,
    USER,
    Account,
    Setting,
    Tag,
    User,
)


@pytest_asyncio.fixture
async def account_db(registry: ConnectionRegistry) -> SQLiteManager:
    """Manager for accounts.db with Account and Setting tables."""
    manager = SQLiteManager.get_instance("accounts.db", registry)
    await manager.reset_table(ACCOUNT)
    await manager.reset_table(SETTING)
    return manager


@pytest.mark.asyncio
async def test_insert_single_assigns_key(user_db: SQLiteManager) -> None:
    """Test the generated key is written back to the record."""
    alice = User(name="Alice")

    assert await user_db.insert(alice) == 1

    assert alice.id > 0
    assert await user_db.query(USER).to_list() == [alice]


@pytest.mark.asyncio
async def test_insert_batch_assigns_unique_keys(
    user_db: SQLiteManager, sample_users: list[User]
) -> None:
    """Test every batch record gets a distinct non-zero key."""
    assert await user_db.insert(sample_users) == 3

    keys = [user.id for user in sample_users]
    assert all(key > 0 for key in keys)
    assert len(set(keys)) == 3
    assert await user_db.query(USER).count() == 3


@pytest.mark.asyncio
async def test_insert_batch_is_atomic(account_db: SQLiteManager) -> None:
    """Test a failing record rolls back the whole batch."""
    accounts = [
        Account(email="a@example.com"),
        Account(email="b@example.com"),
        Account(email="a@example.com"),
    ]

    with pytest.raises(ConstraintError) as exc_info:
        await account_db.insert(accounts)

    assert exc_info.value.index == 2
    assert exc_info.value.record is accounts[2]
    assert await account_db.query(ACCOUNT).count() == 0
    assert [account.id for account in accounts] == [0, 0, 0]


@pytest.mark.asyncio
async def test_insert_explicit_key(user_db: SQLiteManager) -> None:
    """Test a caller-set key is kept, and reusing it is a constraint error."""
    await user_db.insert(User(id=10, name="Ten"))

    with pytest.raises(ConstraintError):
        await user_db.insert(User(id=10, name="Duplicate"))

    users = await user_db.query(USER).to_list()
    assert users == [User(id=10, name="Ten")]


@pytest.mark.asyncio
async def test_insert_manual_text_key(account_db: SQLiteManager) -> None:
    """Test records keyed by a text field."""
    await account_db.insert([Setting(key="theme", value="dark")])

    setting = await account_db.query(SETTING).where(key="theme").first_or_default()
    assert setting == Setting(key="theme", value="dark")


@pytest.mark.asyncio
async def test_update_single(user_db: SQLiteManager) -> None:
    """Test updating one record."""
    alice = User(name="Alice")
    await user_db.insert(alice)

    alice.name = "Alice Updated"
    assert await user_db.update(alice) == 1

    stored = await user_db.query(USER).where(field("id") == alice.id).first_or_default()
    assert stored is not None
    assert stored.name == "Alice Updated"


@pytest.mark.asyncio
async def test_update_batch(user_db: SQLiteManager, sample_users: list[User]) -> None:
    """Test updating a batch."""
    await user_db.insert(sample_users)
    users = await user_db.query(USER).to_list()
    for user in users:
        user.name += " Batch"

    assert await user_db.update(users) == 3

    names = [u.name for u in await user_db.query(USER).to_list()]
    assert names == ["Alice Batch", "Bob Batch", "Charlie Batch"]


@pytest.mark.asyncio
async def test_update_missing_row_reverts_batch(
    user_db: SQLiteManager, sample_users: list[User]
) -> None:
    """Test updating an unknown key fails and reverts the batch."""
    await user_db.insert(sample_users)
    sample_users[0].name = "Changed"
    ghost = User(id=999, name="Ghost")

    with pytest.raises(NotFoundError) as exc_info:
        await user_db.update([sample_users[0], ghost])

    assert exc_info.value.index == 1
    assert exc_info.value.record is ghost
    first = await user_db.query(USER).first_or_default()
    assert first is not None
    assert first.name == "Alice"


@pytest.mark.asyncio
async def test_update_without_key(user_db: SQLiteManager) -> None:
    """Test a record that was never inserted cannot be updated."""
    with pytest.raises(NotFoundError, match="no primary key"):
        await user_db.update(User(name="Unsaved"))


@pytest.mark.asyncio
async def test_update_unique_violation(account_db: SQLiteManager) -> None:
    """Test an update colliding with a unique column."""
    first, second = Account(email="a@example.com"), Account(email="b@example.com")
    await account_db.insert([first, second])

    second.email = "a@example.com"
    with pytest.raises(ConstraintError):
        await account_db.update(second)


@pytest.mark.asyncio
async def test_delete_single(user_db: SQLiteManager, sample_users: list[User]) -> None:
    """Test deleting one record."""
    await user_db.insert(sample_users)

    assert await user_db.delete(sample_users[0]) == 1

    assert [u.name for u in await user_db.query(USER).to_list()] == ["Bob", "Charlie"]


@pytest.mark.asyncio
async def test_delete_batch_reduces_count(
    user_db: SQLiteManager, sample_users: list[User]
) -> None:
    """Test deleting N records reduces the count by N."""
    await user_db.insert(sample_users)
    await user_db.insert(User(name="Dave"))
    before = await user_db.query(USER).count()

    assert await user_db.delete(sample_users) == 3

    assert await user_db.query(USER).count() == before - 3


@pytest.mark.asyncio
async def test_delete_missing_is_noop(user_db: SQLiteManager) -> None:
    """Test deleting unknown or unsaved records is not an error."""
    await user_db.insert(User(name="Alice"))

    assert await user_db.delete([User(id=999, name="Ghost"), User(name="Unsaved")]) == 0
    assert await user_db.query(USER).count() == 1


@pytest.mark.asyncio
async def test_empty_batches(user_db: SQLiteManager) -> None:
    """Test empty batches do nothing."""
    assert await user_db.insert([]) == 0
    assert await user_db.update([]) == 0
    assert await user_db.delete([]) == 0


@pytest.mark.asyncio
async def test_wrong_record_type(user_db: SQLiteManager) -> None:
    """Test records must match the executor's entity."""
    executor = CrudExecutor(USER)

    with pytest.raises(TypeError, match="Expected User"):
        await executor.insert(user_db.handle, [Account(email="a@example.com")])  # type: ignore[list-item]


@pytest.mark.asyncio
async def test_update_key_only_entity(registry: ConnectionRegistry) -> None:
    """Test updates of records without value fields still require the row."""
    db = SQLiteManager.get_instance("tags.db", registry)
    await db.reset_table(TAG)
    tag = Tag()
    await db.insert(tag)

    assert tag.id > 0
    assert await db.update(tag) == 1
    with pytest.raises(NotFoundError) as exc_info:
        await db.update([tag, Tag(id=999)])

    assert exc_info.value.index == 1


@pytest.mark.asyncio
async def test_threads_sharing_handle_keep_batches_atomic(
    account_db: SQLiteManager,
) -> None:
    """Test concurrent batches on one handle never interleave."""
    batches = 40

    def good_batch(i: int) -> list[Account]:
        return [Account(email=f"good-{i}-{j}@example.com") for j in range(5)]

    def bad_batch(i: int) -> list[Account]:
        accounts = [Account(email=f"bad-{i}-{j}@example.com") for j in range(4)]
        return accounts + [Account(email=f"bad-{i}-0@example.com")]

    def write(make_batch, expect_failure: bool) -> list[Exception]:
        unexpected: list[Exception] = []

        async def run() -> None:
            for i in range(batches):
                try:
                    await account_db.insert(make_batch(i))
                except ConstraintError:
                    if not expect_failure:
                        raise
                except Exception as e:
                    unexpected.append(e)

        asyncio.run(run())
        return unexpected

    good_errors, bad_errors = await asyncio.gather(
        asyncio.to_thread(write, good_batch, False),
        asyncio.to_thread(write, bad_batch, True),
    )

    assert good_errors == []
    assert bad_errors == []
    query = account_db.query(ACCOUNT)
    assert await query.where(field("email").contains("good-")).count() == batches * 5
    assert await query.where(field("email").contains("bad-")).count() == 0
