"""SQLite database connection implementation."""

import itertools
import sqlite3
import threading
from pathlib import Path
from typing import Any

from litedb.config import Settings, settings as default_settings
from litedb.database.interfaces import DatabaseConnection, DatabaseTransaction
from litedb.exceptions import DatabaseConnectionError
from litedb.log import get_logger
from litedb.types import DatabaseParamType

logger = get_logger(__name__)

MEMORY_PATH = ":memory:"


class SQLiteConnection(DatabaseConnection):
    """SQLite database connection implementation.

    The connection runs with ``isolation_level=None``: single statements
    autocommit and multi-statement work goes through :meth:`transaction`.
    """

    def __init__(self, db_path: Path | str, settings: Settings | None = None) -> None:
        """Initialize SQLite connection.

        Args:
            db_path: Path to SQLite database file, or ``:memory:``
            settings: Connection settings (defaults to the global settings)
        """
        self.db_path = db_path if str(db_path) == MEMORY_PATH else Path(db_path)
        self.settings = settings or default_settings
        self._connection: sqlite3.Connection | None = None
        self._savepoints = itertools.count(1)
        # Held for each statement and for the whole of each transaction scope
        self._lock = threading.RLock()

    def open(self) -> None:
        """Open the SQLite database file, creating it if needed.

        Raises:
            DatabaseConnectionError: If the file cannot be opened or is not
                a SQLite database
        """
        if self._connection is not None:
            return

        connection: sqlite3.Connection | None = None
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=self.settings.connect_timeout,
                isolation_level=None,
            )
            connection.row_factory = sqlite3.Row
            self._configure_connection(connection)
        except (sqlite3.Error, OSError) as e:
            if connection is not None:
                connection.close()
            logger.error(f"Failed to connect to SQLite database {self.db_path}: {e}")
            raise DatabaseConnectionError(str(self.db_path), str(e)) from e

        self._connection = connection
        logger.info(f"Connected to SQLite: {self.db_path}")

    def close(self) -> None:
        """Close SQLite database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info(f"Disconnected from SQLite: {self.db_path}")

    async def execute(self, query: str, params: DatabaseParamType = None) -> Any:
        """Execute a statement and return its cursor."""
        connection = self._require_connection()
        logger.debug(f"Executing: {query} {params or ''}")

        with self._lock:
            try:
                return self._run(connection, query, params)
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise

    async def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        """Fetch single row as a dictionary."""
        connection = self._require_connection()
        logger.debug(f"Fetching one: {query} {params or ''}")

        with self._lock:
            try:
                row = self._run(connection, query, params).fetchone()
            except sqlite3.Error as e:
                logger.error(f"Fetch one failed: {e}")
                raise
        if row:
            return dict(row)
        return None

    async def fetch_all(
        self, query: str, params: DatabaseParamType = None
    ) -> list[dict[str, Any]]:
        """Fetch all rows as dictionaries."""
        connection = self._require_connection()
        logger.debug(f"Fetching all: {query} {params or ''}")

        with self._lock:
            try:
                rows = self._run(connection, query, params).fetchall()
            except sqlite3.Error as e:
                logger.error(f"Fetch all failed: {e}")
                raise
        return [dict(row) for row in rows]

    def transaction(self) -> "SQLiteTransaction":
        """Create a transaction scope.

        Inside an already open transaction the scope becomes a savepoint, so
        an inner failure only reverts the inner work. The scope holds the
        connection lock from begin to commit or rollback.
        """
        return SQLiteTransaction(
            self._require_connection(), next(self._savepoints), self._lock
        )

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connection is not None

    def _require_connection(self) -> sqlite3.Connection:
        if not self._connection:
            raise RuntimeError("Database not connected")
        return self._connection

    def _configure_connection(self, connection: sqlite3.Connection) -> None:
        """Apply PRAGMAs from settings."""
        # Fails here rather than on first use when the file is not a database
        connection.execute("SELECT 1 FROM sqlite_master LIMIT 1")
        connection.execute(f"PRAGMA journal_mode = {self.settings.journal_mode}")
        connection.execute("PRAGMA synchronous = NORMAL")
        connection.execute(
            f"PRAGMA foreign_keys = {'ON' if self.settings.foreign_keys else 'OFF'}"
        )
        connection.execute(f"PRAGMA busy_timeout = {self.settings.busy_timeout_ms}")

    @staticmethod
    def _run(
        connection: sqlite3.Connection, query: str, params: DatabaseParamType
    ) -> sqlite3.Cursor:
        cursor = connection.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        return cursor


class SQLiteTransaction(DatabaseTransaction):
    """SQLite transaction scope (``BEGIN IMMEDIATE`` or a savepoint).

    The connection lock is taken in :meth:`begin` and released by
    :meth:`commit` or :meth:`rollback`. Other threads sharing the connection
    wait for the whole scope instead of joining it.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        ident: int = 0,
        lock: "threading.RLock | None" = None,
    ) -> None:
        """Initialize SQLite transaction.

        Args:
            connection: SQLite connection in autocommit mode
            ident: Number used to name the savepoint when nested
            lock: Lock serializing use of the connection
        """
        self._connection = connection
        self._savepoint: str | None = None
        self._ident = ident
        self._lock = lock if lock is not None else threading.RLock()

    async def begin(self) -> None:
        """Begin the transaction, or a savepoint if one is already open."""
        self._lock.acquire()
        try:
            if self._connection.in_transaction:
                self._savepoint = f"litedb_sp_{self._ident}"
                self._connection.execute(f"SAVEPOINT {self._savepoint}")
            else:
                self._connection.execute("BEGIN IMMEDIATE")
        except BaseException:
            self._lock.release()
            raise

    async def commit(self) -> None:
        """Commit the transaction; on failure the work is rolled back."""
        try:
            if self._savepoint:
                self._connection.execute(f"RELEASE SAVEPOINT {self._savepoint}")
            else:
                self._connection.commit()
        except sqlite3.Error:
            self._undo()
            raise
        finally:
            self._lock.release()

    async def rollback(self) -> None:
        """Rollback the transaction."""
        try:
            self._undo()
        finally:
            self._lock.release()
        logger.debug("Transaction rolled back")

    def _undo(self) -> None:
        if self._savepoint:
            self._connection.execute(f"ROLLBACK TO SAVEPOINT {self._savepoint}")
            self._connection.execute(f"RELEASE SAVEPOINT {self._savepoint}")
        else:
            self._connection.rollback()
