"""SQLite implementation of TaskStore."""

from __future__ import annotations

import sqlite3
from typing import Any

from focusnote.adapters.sqlite.connection import get_connection
from focusnote.adapters.sqlite.schema import TASK_COLUMNS
from focusnote.adapters.sqlite.utils import (
    build_update_clause,
    row_to_dict,
    to_db_value,
    translate_errors,
)
from focusnote.models import NotFoundError, Task
from focusnote.repositories import TaskStore


class SqliteTaskStore(TaskStore):
    """SQLite implementation of the task store."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task store.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional ready-made connection (takes precedence).
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    @translate_errors
    async def list_all(self) -> list[Task]:
        cursor = self.connection.execute(
            "SELECT * FROM tasks ORDER BY created_at ASC, rowid ASC"
        )
        return [self._to_task(row) for row in cursor.fetchall()]

    @translate_errors
    async def get(self, task_id: str) -> Task:
        row = self.connection.execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        ).fetchone()

        if not row:
            raise NotFoundError("task", task_id)

        return self._to_task(row)

    @translate_errors
    async def add(self, task: Task) -> Task:
        data = task.model_dump(exclude={"tags"})
        columns = list(data)
        placeholders = ", ".join("?" for _ in columns)

        try:
            self.connection.execute(
                f"INSERT INTO tasks ({', '.join(columns)}) VALUES ({placeholders})",
                [to_db_value(data[c]) for c in columns],
            )
            self._set_task_tags(task.id, task.tags)
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise

        return await self.get(task.id)

    @translate_errors
    async def update(self, task_id: str, patch: dict[str, Any]) -> Task:
        await self.get(task_id)

        set_clause, params = build_update_clause(patch, TASK_COLUMNS)
        try:
            if set_clause:
                self.connection.execute(
                    f"UPDATE tasks SET {set_clause} WHERE id = ?",
                    [*params, task_id],
                )
            if patch.get("tags") is not None:
                self._set_task_tags(task_id, patch["tags"])
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise

        return await self.get(task_id)

    @translate_errors
    async def delete(self, task_id: str) -> None:
        cursor = self.connection.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        self.connection.commit()

        if cursor.rowcount == 0:
            raise NotFoundError("task", task_id)

    def _to_task(self, row: sqlite3.Row) -> Task:
        task_dict = row_to_dict(row)
        task_dict["tags"] = self._get_task_tags(task_dict["id"])
        return Task(**task_dict)

    def _get_task_tags(self, task_id: str) -> list[str]:
        cursor = self.connection.execute(
            "SELECT tag_id FROM task_tags WHERE task_id = ? ORDER BY rowid",
            (task_id,),
        )
        return [row[0] for row in cursor.fetchall()]

    def _set_task_tags(self, task_id: str, tag_ids: list[str]) -> None:
        """Set tags for a task (replaces existing)."""
        self.connection.execute("DELETE FROM task_tags WHERE task_id = ?", (task_id,))

        for tag_id in tag_ids:
            self.connection.execute(
                "INSERT OR IGNORE INTO task_tags (task_id, tag_id) VALUES (?, ?)",
                (task_id, tag_id),
            )
