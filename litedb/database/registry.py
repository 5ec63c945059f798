"""Process-scoped registry of database handles keyed by file path."""

import atexit
import threading
from pathlib import Path

from litedb.config import Settings, settings as default_settings
from litedb.log import get_logger

from .handle import DatabaseHandle
from .implementations.sqlite.sqlite_connection import MEMORY_PATH

logger = get_logger(__name__)


class ConnectionRegistry:
    """Maps database file paths to a single shared :class:`DatabaseHandle`.

    Relative paths are resolved against ``settings.database_dir`` (or the
    working directory), so ``users.db`` and ``./users.db`` share a handle.
    ``:memory:`` is never shared: every request opens a new in-memory
    database.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self._handles: dict[str, DatabaseHandle] = {}
        self._lock = threading.Lock()

    def _key(self, path: str | Path) -> str:
        return str(self.settings.resolve_path(path))

    def get_or_create(self, path: str | Path) -> DatabaseHandle:
        """Return the handle for ``path``, opening it on first request.

        Creation is serialized, so concurrent callers for the same path get
        the identical handle.

        Raises:
            DatabaseConnectionError: If the file cannot be opened; nothing is
                registered in that case
        """
        if str(path) == MEMORY_PATH:
            handle = DatabaseHandle(MEMORY_PATH, self.settings)
            handle.open()
            return handle

        key = self._key(path)
        with self._lock:
            handle = self._handles.get(key)
            if handle is None:
                handle = DatabaseHandle(key, self.settings)
                handle.open()
                self._handles[key] = handle
                logger.info(f"Registered database handle: {key}")
            return handle

    def get(self, path: str | Path) -> DatabaseHandle | None:
        """Return the handle for ``path`` if one was created."""
        with self._lock:
            return self._handles.get(self._key(path))

    def close_all(self) -> None:
        """Close and forget every handle."""
        with self._lock:
            handles = list(self._handles.values())
            self._handles.clear()
        for handle in handles:
            handle.close()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self.get(path) is not None

    def __len__(self) -> int:
        return len(self._handles)


_default_registry: ConnectionRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> ConnectionRegistry:
    """Return the process-wide registry, closed at interpreter exit."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = ConnectionRegistry()
            atexit.register(_default_registry.close_all)
        return _default_registry
