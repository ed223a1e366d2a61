"""SQLite implementation of SessionStore."""

from __future__ import annotations

import sqlite3
from typing import Any

from focusnote.adapters.sqlite.connection import get_connection
from focusnote.adapters.sqlite.schema import SESSION_COLUMNS
from focusnote.adapters.sqlite.utils import (
    build_update_clause,
    row_to_dict,
    to_db_value,
    translate_errors,
)
from focusnote.models import NotFoundError, TaskSession
from focusnote.repositories import SessionStore


class SqliteSessionStore(SessionStore):
    """SQLite implementation of the session store."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    @translate_errors
    async def list_all(self) -> list[TaskSession]:
        cursor = self.connection.execute(
            "SELECT * FROM task_sessions ORDER BY started_at ASC, rowid ASC"
        )
        return [TaskSession(**row_to_dict(row)) for row in cursor.fetchall()]

    @translate_errors
    async def get(self, session_id: str) -> TaskSession:
        row = self.connection.execute(
            "SELECT * FROM task_sessions WHERE id = ?", (session_id,)
        ).fetchone()

        if not row:
            raise NotFoundError("session", session_id)

        return TaskSession(**row_to_dict(row))

    @translate_errors
    async def add(self, session: TaskSession) -> TaskSession:
        data = session.model_dump()
        columns = list(data)
        placeholders = ", ".join("?" for _ in columns)

        self.connection.execute(
            f"INSERT INTO task_sessions ({', '.join(columns)}) VALUES ({placeholders})",
            [to_db_value(data[c]) for c in columns],
        )
        self.connection.commit()

        return await self.get(session.id)

    @translate_errors
    async def update(self, session_id: str, patch: dict[str, Any]) -> TaskSession:
        await self.get(session_id)

        set_clause, params = build_update_clause(patch, SESSION_COLUMNS)
        if set_clause:
            self.connection.execute(
                f"UPDATE task_sessions SET {set_clause} WHERE id = ?",
                [*params, session_id],
            )
            self.connection.commit()

        return await self.get(session_id)

    @translate_errors
    async def delete(self, session_id: str) -> None:
        cursor = self.connection.execute(
            "DELETE FROM task_sessions WHERE id = ?", (session_id,)
        )
        self.connection.commit()

        if cursor.rowcount == 0:
            raise NotFoundError("session", session_id)
