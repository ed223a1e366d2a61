"""Store interfaces (ports) implemented by the storage adapters."""

from .repository import SessionStore, TaskStore

__all__ = ["TaskStore", "SessionStore"]
