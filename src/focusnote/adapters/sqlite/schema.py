"""Database schema definitions for the local SQLite store."""

from __future__ import annotations

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    note_id TEXT,
    title TEXT NOT NULL,
    description TEXT,
    status TEXT NOT NULL DEFAULT 'todo',
    priority TEXT NOT NULL DEFAULT 'medium',
    due_date DATETIME,
    estimated_minutes INTEGER,
    actual_minutes INTEGER NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    completed_at DATETIME,
    CHECK (status IN ('todo', 'in_progress', 'done', 'cancelled')),
    CHECK (priority IN ('low', 'medium', 'high')),
    CHECK (actual_minutes >= 0)
)
"""

# Tags are opaque ids owned by an external tag service
CREATE_TASK_TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS task_tags (
    task_id TEXT NOT NULL,
    tag_id TEXT NOT NULL,
    PRIMARY KEY (task_id, tag_id),
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

# No foreign key on task_id: deleting a task leaves its sessions orphaned
CREATE_TASK_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS task_sessions (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    started_at DATETIME NOT NULL,
    ended_at DATETIME,
    duration_minutes INTEGER NOT NULL DEFAULT 0,
    type TEXT NOT NULL DEFAULT 'pomodoro',
    completed BOOLEAN NOT NULL DEFAULT 0,
    achievement TEXT,
    pending TEXT,
    notes TEXT,
    CHECK (type IN ('pomodoro', 'short_break', 'long_break')),
    CHECK (duration_minutes >= 0)
)
"""

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_note ON tasks(note_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)",
]

CREATE_SESSION_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_sessions_task ON task_sessions(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_sessions_open ON task_sessions(ended_at, completed)",
]

ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_TASK_TAGS_TABLE,
    CREATE_TASK_SESSIONS_TABLE,
]

ALL_INDEXES = CREATE_TASK_INDEXES + CREATE_SESSION_INDEXES

TASK_COLUMNS = frozenset(
    {
        "note_id",
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "estimated_minutes",
        "actual_minutes",
        "updated_at",
        "completed_at",
    }
)

SESSION_COLUMNS = frozenset(
    {
        "ended_at",
        "duration_minutes",
        "type",
        "completed",
        "achievement",
        "pending",
        "notes",
    }
)
