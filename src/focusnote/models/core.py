"""Task and session data models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TaskStatus = Literal["todo", "in_progress", "done", "cancelled"]
TaskPriority = Literal["low", "medium", "high"]
SessionType = Literal["pomodoro", "short_break", "long_break"]

TASK_STATUSES: tuple[str, ...] = ("todo", "in_progress", "done", "cancelled")
TASK_PRIORITIES: tuple[str, ...] = ("low", "medium", "high")


def _unique_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    return list(dict.fromkeys(tags))


class Task(BaseModel):
    """Task model representing a unit of work.

    Attributes:
        id: Unique identifier for the task
        note_id: Optional id of the note the task was created from
        title: Short task title
        description: Optional detailed description
        status: Lifecycle status
        priority: Priority level
        due_date: Optional due date
        estimated_minutes: Optional time estimate
        actual_minutes: Minutes credited by closed sessions
        tags: Tag ids attached to the task (set semantics)
        created_at: Creation timestamp
        updated_at: Last update timestamp
        completed_at: Timestamp of the first transition to done
    """

    id: str
    note_id: str | None = None
    title: str
    description: str | None = None
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: datetime | None = None
    estimated_minutes: int | None = Field(default=None, ge=0)
    actual_minutes: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        return _unique_tags(v)


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        note_id: Optional originating note id
        description: Optional detailed description
        priority: Priority level, medium by default
        due_date: Optional due date
        estimated_minutes: Optional time estimate
        tags: Tag ids
    """

    title: str = Field(min_length=1)
    note_id: str | None = None
    description: str | None = None
    priority: TaskPriority = "medium"
    due_date: datetime | None = None
    estimated_minutes: int | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        return _unique_tags(v)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only fields that were explicitly set are merged
    into the stored task. ``actual_minutes`` is not updatable here; it only
    grows through closed sessions.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    estimated_minutes: int | None = Field(default=None, ge=0)
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        return _unique_tags(v)


class TaskSession(BaseModel):
    """One measured interval of work (or break) against a task.

    Attributes:
        id: Unique identifier for the session
        task_id: Owning task
        started_at: Start timestamp, never changed after creation
        ended_at: End timestamp, set when the session closes
        duration_minutes: Minutes credited to the task
        type: Session type
        completed: True if the countdown reached zero before closing
        achievement: What was achieved during the session
        pending: What is still pending
        notes: Free-form notes
    """

    id: str
    task_id: str
    started_at: datetime
    ended_at: datetime | None = None
    duration_minutes: int = Field(default=0, ge=0)
    type: SessionType = "pomodoro"
    completed: bool = False
    achievement: str | None = None
    pending: str | None = None
    notes: str | None = None

    @property
    def is_open(self) -> bool:
        """A session is open until it has an end time or is completed."""
        return self.ended_at is None and not self.completed


class SessionCreate(BaseModel):
    """Model for opening a session."""

    task_id: str = Field(min_length=1)
    type: SessionType = "pomodoro"


class SessionUpdate(BaseModel):
    """Model for closing or annotating a session."""

    ended_at: datetime | None = None
    duration_minutes: int | None = Field(default=None, ge=0)
    completed: bool | None = None
    achievement: str | None = None
    pending: str | None = None
    notes: str | None = None


class TaskStats(BaseModel):
    """Task counts by status."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    cancelled: int = 0
