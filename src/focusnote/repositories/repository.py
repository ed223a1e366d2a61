"""Store abstraction layer for focusnote.

This module defines the abstract base classes (interfaces) for the two record
types the engine persists, following the Ports & Adapters pattern.

Stores are deliberately dumb: they insert, fetch, merge and delete opaque
records and report failures. Defaults, derived fields and cross-record
consistency belong to the services that use them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from focusnote.models import Task, TaskSession


class TaskStore(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """List every stored task, oldest first.

        Raises:
            PersistenceError: If the backend cannot be read
        """
        raise NotImplementedError("TaskStore.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If task does not exist
            PersistenceError: If the backend cannot be read
        """
        raise NotImplementedError("TaskStore.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task: Task) -> Task:
        """Insert a fully built task record.

        Raises:
            PersistenceError: If the backend cannot be written
        """
        raise NotImplementedError("TaskStore.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, patch: dict[str, Any]) -> Task:
        """Merge *patch* into the stored task and return the result.

        Args:
            task_id: Unique identifier for the task
            patch: Field name to new value; absent fields are left untouched

        Raises:
            NotFoundError: If task does not exist
            PersistenceError: If the backend cannot be written
        """
        raise NotImplementedError("TaskStore.update() must be implemented by adapter")

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If task does not exist
            PersistenceError: If the backend cannot be written
        """
        raise NotImplementedError("TaskStore.delete() must be implemented by adapter")


class SessionStore(ABC):
    """Abstract base class for task session persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[TaskSession]:
        """List every stored session, oldest first."""
        raise NotImplementedError(
            "SessionStore.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, session_id: str) -> TaskSession:
        """Get a specific session by ID.

        Raises:
            NotFoundError: If session does not exist
        """
        raise NotImplementedError("SessionStore.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, session: TaskSession) -> TaskSession:
        """Insert a fully built session record."""
        raise NotImplementedError("SessionStore.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, session_id: str, patch: dict[str, Any]) -> TaskSession:
        """Merge *patch* into the stored session and return the result.

        Raises:
            NotFoundError: If session does not exist
        """
        raise NotImplementedError(
            "SessionStore.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Delete a session.

        Raises:
            NotFoundError: If session does not exist
        """
        raise NotImplementedError(
            "SessionStore.delete() must be implemented by adapter"
        )
