"""Task service - business rules for task records.

This service sits between the timer engine / commands and the task store.
It owns record defaults, the ``completed_at`` rule and minute crediting.
"""

from __future__ import annotations

import logging
from datetime import datetime

from focusnote.models import Task, TaskCreate, TaskStatus, TaskUpdate
from focusnote.repositories import TaskStore
from focusnote.utils.clock import SystemClock
from focusnote.utils.uuid_utils import generate_uuid

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task business logic.

    Every mutation refreshes ``updated_at``. ``completed_at`` is stamped the
    first time a task becomes ``done`` and never changes afterwards.
    """

    def __init__(self, task_store: TaskStore, clock=None):
        """Initialize the task service.

        Args:
            task_store: TaskStore implementation for data access
            clock: Object with a ``now()`` method, SystemClock by default
        """
        self.store = task_store
        self.clock = clock or SystemClock()

    async def list_all(self) -> list[Task]:
        """List every task."""
        return await self.store.list_all()

    async def list_by_note(self, note_id: str) -> list[Task]:
        """List tasks linked to *note_id*."""
        return [t for t in await self.store.list_all() if t.note_id == note_id]

    async def list_by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in await self.store.list_all() if t.status == status]

    async def get(self, task_id: str) -> Task:
        """Get a task by ID.

        Raises:
            NotFoundError: If the task does not exist
        """
        return await self.store.get(task_id)

    async def create(self, task_data: TaskCreate) -> Task:
        """Create a new task in ``todo`` with no tracked time."""
        now = self.clock.now()
        task = Task(
            id=generate_uuid(),
            **task_data.model_dump(),
            status="todo",
            actual_minutes=0,
            created_at=now,
            updated_at=now,
        )
        created = await self.store.add(task)
        logger.debug("created task %s", created.id)
        return created

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Merge the explicitly set fields of *updates* into a task.

        Raises:
            NotFoundError: If the task does not exist
        """
        current = await self.store.get(task_id)
        now = self.clock.now()

        patch = updates.model_dump(exclude_unset=True)
        # Required fields cannot be cleared
        for key in ("title", "status", "priority", "tags"):
            if key in patch and patch[key] is None:
                del patch[key]
        patch["updated_at"] = now
        if patch.get("status") == "done" and current.completed_at is None:
            patch["completed_at"] = now

        return await self.store.update(task_id, patch)

    async def delete(self, task_id: str) -> None:
        """Delete a task. Its sessions are left in place.

        Raises:
            NotFoundError: If the task does not exist
        """
        await self.store.delete(task_id)
        logger.info("deleted task %s", task_id)

    async def create_batch(self, note_id: str | None, titles: list[str]) -> list[Task]:
        """Create one task per title, linked to *note_id*, in input order.

        Titles are trimmed; titles that are blank after trimming are skipped.
        """
        created = []
        for raw_title in titles:
            title = raw_title.strip()
            if not title:
                logger.warning("skipping blank task title for note %s", note_id)
                continue
            created.append(
                await self.create(
                    TaskCreate(note_id=note_id, title=title, priority="medium")
                )
            )
        return created

    async def credit_minutes(self, task_id: str, minutes: int) -> Task:
        """Add *minutes* of tracked time to a task.

        Raises:
            ValueError: If minutes is negative
            NotFoundError: If the task does not exist
        """
        if minutes < 0:
            raise ValueError(f"Cannot credit a negative duration: {minutes}")

        current = await self.store.get(task_id)
        return await self.store.update(
            task_id,
            {
                "actual_minutes": current.actual_minutes + minutes,
                "updated_at": self.clock.now(),
            },
        )

    async def set_status(self, task_id: str, status: TaskStatus) -> Task:
        return await self.update(task_id, TaskUpdate(status=status))

    async def complete(self, task_id: str) -> Task:
        """Mark a task as done."""
        return await self.set_status(task_id, "done")

    async def add_task(
        self,
        title: str,
        *,
        note_id: str | None = None,
        description: str | None = None,
        priority: str = "medium",
        due_date: str | datetime | None = None,
        estimated_minutes: int | None = None,
        tags: list[str] | None = None,
    ) -> Task:
        """Create a task from keyword arguments.

        Args:
            title: Task title (required)
            note_id: Originating note id
            description: Detailed description
            priority: low, medium or high
            due_date: Due date (ISO format string or datetime)
            estimated_minutes: Time estimate
            tags: Tag ids

        Returns:
            Created Task object
        """
        parsed_due_date = None
        if due_date:
            if isinstance(due_date, str):
                parsed_due_date = datetime.fromisoformat(due_date)
            else:
                parsed_due_date = due_date

        task_data = TaskCreate(
            title=title,
            note_id=note_id,
            description=description,
            priority=priority,
            due_date=parsed_due_date,
            estimated_minutes=estimated_minutes,
            tags=tags or [],
        )
        return await self.create(task_data)

    async def update_task(self, task_id: str, **fields: object) -> Task:
        """Update a task from keyword arguments; only given fields change."""
        due_date = fields.get("due_date")
        if isinstance(due_date, str):
            fields["due_date"] = datetime.fromisoformat(due_date)
        return await self.update(task_id, TaskUpdate(**fields))
