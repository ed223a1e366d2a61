"""Database connection management for the local SQLite store.

One connection is kept per database path for the lifetime of the process,
configured with WAL mode and foreign key enforcement, and migrated to the
latest schema when first opened.
"""

from __future__ import annotations

import atexit
import logging
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from focusnote.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from focusnote.models.exceptions import PersistenceError

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


class DatabaseConnection:
    """Process-wide registry of SQLite connections keyed by database path."""

    _connections: dict[str, sqlite3.Connection] = {}
    _cleanup_registered = False

    @classmethod
    def default_path(cls) -> Path:
        return Path(user_data_dir("focusnote")) / "focusnote.db"

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create the connection for *db_path*.

        Args:
            db_path: Path to database file, ``":memory:"``, or None for the
                default location under the user data directory.

        Raises:
            PersistenceError: If the database cannot be opened or migrated
        """
        key = str(db_path) if db_path is not None else str(cls.default_path())

        if key in cls._connections:
            return cls._connections[key]

        try:
            connection = cls._open(key)
        except (sqlite3.Error, OSError, RuntimeError) as e:
            raise PersistenceError(f"Cannot open database {key}: {e}") from e

        cls._connections[key] = connection
        if not cls._cleanup_registered:
            atexit.register(cls.close_all)
            cls._cleanup_registered = True

        return connection

    @classmethod
    def _open(cls, key: str) -> sqlite3.Connection:
        is_new_database = False
        if key != MEMORY_DB:
            path = Path(key)
            path.parent.mkdir(parents=True, exist_ok=True)
            is_new_database = not path.exists()

        connection = sqlite3.connect(key, check_same_thread=False, timeout=30.0)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        if key != MEMORY_DB:
            connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(key, 0o600)
            logger.info("created database %s", key)

        MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
        return connection

    @classmethod
    def close_connection(cls, db_path: str | Path) -> None:
        """Close the connection for a single path, if open."""
        connection = cls._connections.pop(str(db_path), None)
        if connection is not None:
            connection.commit()
            connection.close()

    @classmethod
    def close_all(cls) -> None:
        """Close every open connection."""
        for key in list(cls._connections):
            try:
                cls.close_connection(key)
            except sqlite3.Error as e:
                logger.warning("error closing database %s: %s", key, e)


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
