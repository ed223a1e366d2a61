"""focusnote domain models.

Pydantic models for tasks, sessions and configuration, plus the timer
state dataclass and the exception taxonomy.
"""

from .config_models import (
    DEFAULT_POMODORO_SETTINGS,
    AppConfig,
    PomodoroSettings,
    StorageConfig,
)
from .core import (
    TASK_PRIORITIES,
    TASK_STATUSES,
    SessionCreate,
    SessionType,
    SessionUpdate,
    Task,
    TaskCreate,
    TaskPriority,
    TaskSession,
    TaskStats,
    TaskStatus,
    TaskUpdate,
)
from .exceptions import (
    CreditError,
    FocusNoteError,
    InvalidStateError,
    NotFoundError,
    PersistenceError,
    SessionConflictError,
)
from .timer import TimerPhase, TimerState

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStats",
    "TaskStatus",
    "TaskPriority",
    "TASK_STATUSES",
    "TASK_PRIORITIES",
    # Session models
    "TaskSession",
    "SessionCreate",
    "SessionUpdate",
    "SessionType",
    # Timer
    "TimerState",
    "TimerPhase",
    # Config
    "AppConfig",
    "StorageConfig",
    "PomodoroSettings",
    "DEFAULT_POMODORO_SETTINGS",
    # Errors
    "FocusNoteError",
    "NotFoundError",
    "PersistenceError",
    "CreditError",
    "InvalidStateError",
    "SessionConflictError",
]
