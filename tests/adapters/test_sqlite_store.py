"""SQLite-specific tests: connection handling, migrations and error mapping."""

from __future__ import annotations

import sqlite3
import stat
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from focusnote.adapters.sqlite import DatabaseConnection, SqliteTaskStore
from focusnote.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from focusnote.adapters.sqlite.utils import build_update_clause, to_db_value
from focusnote.models import PersistenceError, Task

_NOW = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def _memory_connection() -> sqlite3.Connection:
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    return conn


# ---------------------------------------------------------------------------
# Migrations
# ---------------------------------------------------------------------------


class TestMigrations:
    def test_fresh_database_is_migrated(self):
        conn = _memory_connection()
        applied = MigrationRunner(conn).run_migrations(ALL_MIGRATIONS)

        assert applied == len(ALL_MIGRATIONS)
        assert MigrationRunner(conn).get_current_version() == ALL_MIGRATIONS[-1].version
        tables = {
            row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        assert {"tasks", "task_tags", "task_sessions", "schema_version"} <= tables

    def test_migrations_are_idempotent(self):
        conn = _memory_connection()
        runner = MigrationRunner(conn)
        runner.run_migrations(ALL_MIGRATIONS)

        assert runner.run_migrations(ALL_MIGRATIONS) == 0
        (recorded,) = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()
        assert recorded == len(ALL_MIGRATIONS)

    def test_rejects_old_version(self):
        conn = _memory_connection()
        runner = MigrationRunner(conn)
        runner.run_migrations(ALL_MIGRATIONS)

        with pytest.raises(ValueError):
            runner.run_migration(ALL_MIGRATIONS[0])

    def test_failed_migration_raises_runtime_error(self):
        conn = _memory_connection()
        broken = MagicMock()
        broken.version = 99
        broken.description = "broken"
        broken.up.side_effect = sqlite3.OperationalError("boom")

        with pytest.raises(RuntimeError):
            MigrationRunner(conn).run_migration(broken)
        assert MigrationRunner(conn).get_current_version() == 0


# ---------------------------------------------------------------------------
# Connection
# ---------------------------------------------------------------------------


class TestDatabaseConnection:
    def test_connection_is_cached_per_path(self, tmp_path):
        path = tmp_path / "db.sqlite"
        first = DatabaseConnection.get_connection(path)

        assert DatabaseConnection.get_connection(str(path)) is first

    def test_new_database_file_is_owner_only(self, tmp_path):
        path = tmp_path / "db.sqlite"
        DatabaseConnection.get_connection(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_wal_mode_enabled(self, tmp_path):
        conn = DatabaseConnection.get_connection(tmp_path / "db.sqlite")
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode.lower() == "wal"

    def test_unopenable_path_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(PersistenceError):
            DatabaseConnection.get_connection(blocker / "db.sqlite")


# ---------------------------------------------------------------------------
# Error mapping and helpers
# ---------------------------------------------------------------------------


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_sqlite_error_becomes_persistence_error(self):
        conn = MagicMock()
        conn.execute.side_effect = sqlite3.OperationalError("disk I/O error")
        store = SqliteTaskStore(connection=conn)

        with pytest.raises(PersistenceError):
            await store.list_all()

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_persistence_error(self, tmp_path):
        store = SqliteTaskStore(db_path=str(tmp_path / "db.sqlite"))
        task = Task(id="t1", title="A", created_at=_NOW, updated_at=_NOW)
        await store.add(task)

        with pytest.raises(PersistenceError):
            await store.add(task)


class TestUtils:
    def test_build_update_clause_keeps_none_and_skips_unknown(self):
        clause, params = build_update_clause(
            {"title": "x", "description": None, "bogus": 1},
            frozenset({"title", "description"}),
        )
        assert clause == "title = ?, description = ?"
        assert params == ["x", None]

    def test_to_db_value(self):
        assert to_db_value(True) == 1
        assert to_db_value(_NOW) == _NOW.isoformat()
        assert to_db_value("a") == "a"
