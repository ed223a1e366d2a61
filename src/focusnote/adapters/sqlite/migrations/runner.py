"""Forward-only schema migrations.

Each applied migration is recorded as a row of ``schema_version``; a new
database is brought up to date whenever a connection is opened.
"""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at TEXT NOT NULL
)
"""


class Migration(ABC):
    """One numbered schema change."""

    @property
    @abstractmethod
    def version(self) -> int: ...

    @property
    @abstractmethod
    def description(self) -> str: ...

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the change. Must not commit."""


class MigrationRunner:
    """Applies pending migrations to one connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        with self.connection:
            self.connection.execute(_VERSION_TABLE)

    def get_current_version(self) -> int:
        """Highest applied migration version, 0 for an empty database."""
        (version,) = self.connection.execute(
            "SELECT COALESCE(MAX(version), 0) FROM schema_version"
        ).fetchone()
        return version

    def run_migration(self, migration: Migration) -> None:
        """Apply *migration* and record it in a single transaction.

        Raises:
            ValueError: If *migration* is not newer than the schema
            RuntimeError: If applying it fails; nothing is recorded
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not newer than schema version {current}"
            )

        try:
            with self.connection:
                migration.up(self.connection)
                self.connection.execute(
                    "INSERT INTO schema_version (version, description, applied_at) "
                    "VALUES (?, ?, ?)",
                    (migration.version, migration.description, datetime.now(UTC).isoformat()),
                )
        except sqlite3.Error as e:
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        logger.info("schema migrated to v%d (%s)", migration.version, migration.description)

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Apply every migration newer than the schema, oldest first.

        Returns:
            How many migrations were applied
        """
        current = self.get_current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.run_migration(migration)
        return len(pending)
