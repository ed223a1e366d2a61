"""Session service - records timed work sessions and credits their tasks."""

from __future__ import annotations

import logging

from focusnote.models import (
    CreditError,
    InvalidStateError,
    NotFoundError,
    SessionType,
    SessionUpdate,
    TaskSession,
)
from focusnote.repositories import SessionStore
from focusnote.services.task_service import TaskService
from focusnote.utils.clock import SystemClock
from focusnote.utils.uuid_utils import generate_uuid

logger = logging.getLogger(__name__)


class SessionService:
    """Service for session business logic.

    Closing a session is the only way a task accumulates tracked time, and a
    session can be closed once.
    """

    def __init__(self, session_store: SessionStore, task_service: TaskService, clock=None):
        """Initialize the session service.

        Args:
            session_store: SessionStore implementation for data access
            task_service: Used to check tasks exist and to credit minutes
            clock: Object with a ``now()`` method, SystemClock by default
        """
        self.store = session_store
        self.task_service = task_service
        self.clock = clock or SystemClock()

    async def list_all(self) -> list[TaskSession]:
        return await self.store.list_all()

    async def get(self, session_id: str) -> TaskSession:
        """Get a session by ID.

        Raises:
            NotFoundError: If the session does not exist
        """
        return await self.store.get(session_id)

    async def get_by_task(self, task_id: str) -> list[TaskSession]:
        """All sessions recorded against *task_id*, oldest first.

        Sessions of deleted tasks are still returned.
        """
        sessions = [s for s in await self.store.list_all() if s.task_id == task_id]
        return sorted(sessions, key=lambda s: s.started_at)

    async def open(self, task_id: str, type: SessionType = "pomodoro") -> TaskSession:
        """Open a new session for an existing task.

        Raises:
            NotFoundError: If the task does not exist
        """
        await self.task_service.get(task_id)

        session = TaskSession(
            id=generate_uuid(),
            task_id=task_id,
            started_at=self.clock.now(),
            duration_minutes=0,
            type=type,
            completed=False,
        )
        created = await self.store.add(session)
        logger.info("opened %s session %s for task %s", type, created.id, task_id)
        return created

    async def close(self, session_id: str, updates: SessionUpdate) -> TaskSession:
        """Close an open session and credit its duration to the task.

        ``ended_at`` defaults to now when the update does not carry one.

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateError: If the session is already closed
            CreditError: If the session was closed but the task could not be
                credited
        """
        current = await self.store.get(session_id)
        if not current.is_open:
            raise InvalidStateError(f"Session {session_id} is already closed")

        patch = updates.model_dump(exclude_unset=True)
        if patch.get("ended_at") is None:
            patch["ended_at"] = self.clock.now()

        closed = await self.store.update(session_id, patch)
        logger.info(
            "closed session %s (%d min, completed=%s)",
            closed.id,
            closed.duration_minutes,
            closed.completed,
        )
        await self.credit_task(closed)
        return closed

    close_and_credit = close

    async def credit_task(self, session: TaskSession) -> None:
        """Add the session's duration to its task's ``actual_minutes``.

        Zero-length sessions credit nothing. A session whose task was deleted
        is left uncredited.

        Raises:
            CreditError: If the task store fails while crediting
        """
        if not session.duration_minutes:
            return
        try:
            await self.task_service.credit_minutes(session.task_id, session.duration_minutes)
        except NotFoundError:
            logger.warning(
                "task %s of session %s no longer exists, %d min not credited",
                session.task_id,
                session.id,
                session.duration_minutes,
            )
        except Exception as e:
            logger.error("failed to credit session %s: %s", session.id, e)
            raise CreditError(
                f"Session {session.id} was closed but task {session.task_id} "
                f"could not be credited: {e}",
                session=session,
            ) from e

    async def get_open_session(self) -> TaskSession | None:
        """Return the open session, if any."""
        open_sessions = [s for s in await self.store.list_all() if s.is_open]
        if not open_sessions:
            return None
        if len(open_sessions) > 1:
            logger.warning(
                "found %d open sessions, using the most recent", len(open_sessions)
            )
        return max(open_sessions, key=lambda s: s.started_at)

    async def total_time_for_task(self, task_id: str) -> int:
        """Sum of ``duration_minutes`` over the task's sessions."""
        return sum(s.duration_minutes for s in await self.get_by_task(task_id))

    async def delete(self, session_id: str) -> None:
        await self.store.delete(session_id)
