"""SQLite storage adapter (embedded database backend)."""

from .connection import DatabaseConnection, get_connection
from .session_store import SqliteSessionStore
from .task_store import SqliteTaskStore

__all__ = [
    "DatabaseConnection",
    "get_connection",
    "SqliteTaskStore",
    "SqliteSessionStore",
]
