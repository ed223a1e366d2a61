"""
Strategy Pattern: Storage Strategy Container

The backend (JSON documents or SQLite) is chosen once at startup. The
StorageStrategyContext holds the chosen strategy and hands its stores to the
services, which never know which backend they are talking to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from focusnote.repositories import SessionStore, TaskStore


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy encapsulates every store implementation for one backend.
    """

    @abstractmethod
    def get_task_store(self) -> TaskStore:
        """Get task store implementation for this strategy."""

    @abstractmethod
    def get_session_store(self) -> SessionStore:
        """Get session store implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class SqliteStorageStrategy(StorageStrategy):
    """Both stores share one SQLite database file."""

    def __init__(self, db_path: str):
        """
        Initialize SQLite strategy.

        Args:
            db_path: Path to SQLite database file (or ``":memory:"``)
        """
        self.db_path = db_path

        # Import here to avoid circular dependencies
        from focusnote.adapters.sqlite import SqliteSessionStore, SqliteTaskStore

        self._task_store = SqliteTaskStore(db_path=db_path)
        self._session_store = SqliteSessionStore(db_path=db_path)

    def get_task_store(self) -> TaskStore:
        return self._task_store

    def get_session_store(self) -> SessionStore:
        return self._session_store

    @property
    def storage_type(self) -> str:
        return "sqlite"


class JsonStorageStrategy(StorageStrategy):
    """Both stores keep their documents in one directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

        from focusnote.adapters.json_store import (
            JsonKeyValueStore,
            JsonSessionStore,
            JsonTaskStore,
        )

        kv = JsonKeyValueStore(self.directory)
        self._task_store = JsonTaskStore(self.directory, kv=kv)
        self._session_store = JsonSessionStore(self.directory, kv=kv)

    def get_task_store(self) -> TaskStore:
        return self._task_store

    def get_session_store(self) -> SessionStore:
        return self._session_store

    @property
    def storage_type(self) -> str:
        return "json"


def strategy_for(storage_type: str, source: str) -> StorageStrategy:
    """Build the strategy named by a storage config entry.

    Raises:
        ValueError: If *storage_type* is unknown
    """
    if storage_type == "sqlite":
        return SqliteStorageStrategy(db_path=source)
    if storage_type == "json":
        return JsonStorageStrategy(directory=source)
    raise ValueError(f"Invalid storage type: {storage_type}. Must be 'json' or 'sqlite'")


class StorageStrategyContext:
    """
    Strategy context that provides access to all stores.

    Usage:
        strategy = SqliteStorageStrategy(db_path="/path/to/db")
        context = StorageStrategyContext(strategy)

        task_store = context.task_store
    """

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    def switch_strategy(self, new_strategy: StorageStrategy):
        """Switch to a new storage strategy at runtime (tests, data moves)."""
        self._strategy = new_strategy

    @property
    def task_store(self) -> TaskStore:
        """Get task store from current strategy."""
        return self._strategy.get_task_store()

    @property
    def session_store(self) -> SessionStore:
        """Get session store from current strategy."""
        return self._strategy.get_session_store()

    @property
    def storage_type(self) -> str:
        """Get storage type (for logging/debugging only)."""
        return self._strategy.storage_type

    @property
    def strategy(self) -> StorageStrategy:
        return self._strategy
