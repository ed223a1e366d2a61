"""Exceptions raised by focusnote stores, services and the timer engine."""

from __future__ import annotations


class FocusNoteError(Exception):
    """Base exception for all focusnote errors."""


class NotFoundError(FocusNoteError):
    """Raised when a referenced task or session does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class PersistenceError(FocusNoteError):
    """Raised when the storage backend fails for infrastructure reasons."""


class CreditError(PersistenceError):
    """Raised when a session was closed but its task could not be credited."""

    def __init__(self, message: str, session=None):
        super().__init__(message)
        self.session = session


class InvalidStateError(FocusNoteError):
    """Raised when an operation does not apply to the current state."""


class SessionConflictError(InvalidStateError):
    """Raised when starting a session while another one is still open."""

    def __init__(self, open_session_id: str, task_id: str):
        super().__init__(
            f"Session {open_session_id} for task {task_id} is still open. "
            "Stop it before starting another task."
        )
        self.open_session_id = open_session_id
        self.task_id = task_id
