"""Pomodoro timer engine.

Orchestrates:
- the in-memory TimerState countdown, advanced by a Ticker
- the single open work session (opened on start, closed and credited on stop)
- task status transitions (todo -> in_progress, -> done)
- listeners notified with a TimerState copy on every change
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from focusnote.models import (
    CreditError,
    FocusNoteError,
    InvalidStateError,
    NotFoundError,
    SessionConflictError,
    SessionUpdate,
    Task,
    TaskSession,
    TimerState,
)
from focusnote.services.session_service import SessionService
from focusnote.services.settings_service import SettingsService
from focusnote.services.task_service import TaskService
from focusnote.utils.clock import SystemClock, elapsed_whole_minutes
from focusnote.utils.ticker import AsyncioTicker, Ticker

logger = logging.getLogger(__name__)

TimerListener = Callable[[TimerState], None]


class TimerService:
    """State machine over TimerState: idle, running, paused, completed.

    The TimerState and the current session are only ever mutated here.
    Ticks are synchronous and do no I/O; everything that touches the stores
    is a coroutine.
    """

    def __init__(
        self,
        task_service: TaskService,
        session_service: SessionService,
        settings_service: SettingsService,
        ticker: Ticker | None = None,
        clock=None,
    ):
        self.task_service = task_service
        self.session_service = session_service
        self.settings_service = settings_service
        self.ticker = ticker or AsyncioTicker()
        self.clock = clock or SystemClock()

        self._state = TimerState.for_duration(self._work_minutes())
        self._session: TaskSession | None = None
        self._listeners: list[TimerListener] = []

    # ----- Read-only views -----
    @property
    def state(self) -> TimerState:
        """A copy of the current timer state."""
        return replace(self._state)

    @property
    def current_session(self) -> TaskSession | None:
        return self._session

    @property
    def active_task_id(self) -> str | None:
        return self._session.task_id if self._session else None

    # ----- Listeners -----
    def subscribe(self, listener: TimerListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                logger.exception("timer listener failed")

    # ----- Public API -----
    async def start_task(self, task_id: str) -> TaskSession:
        """Mark the task in progress, open a work session and start counting down.

        Raises:
            SessionConflictError: If a session is already open
            NotFoundError: If the task does not exist
        """
        open_session = await self.session_service.get_open_session()
        if open_session is None and self._session is not None:
            logger.warning("session %s is no longer open; dropping it", self._session.id)
            self._reset()
        if open_session is not None:
            raise SessionConflictError(open_session.id, open_session.task_id)

        await self.task_service.set_status(task_id, "in_progress")
        try:
            session = await self.session_service.open(task_id, "pomodoro")
        except FocusNoteError as e:
            logger.warning(
                "task %s is in_progress but its session could not be opened: %s",
                task_id,
                e,
            )
            raise

        total = self._work_minutes() * 60
        self._session = session
        self._state = TimerState(
            is_running=True,
            is_paused=False,
            time_remaining=total,
            total_time=total,
            session_type="pomodoro",
            completed_pomodoros=self._state.completed_pomodoros,
        )
        self.ticker.start(self.tick)
        logger.info("started session %s for task %s (%ds)", session.id, task_id, total)
        self._notify()
        return session

    def toggle_pause(self) -> TimerState:
        """Pause a running countdown or resume a paused one.

        Does nothing when no countdown is running.
        """
        if not self._state.is_running:
            return self.state

        self._state.is_paused = not self._state.is_paused
        logger.info("timer %s", "paused" if self._state.is_paused else "resumed")
        self._notify()
        return self.state

    def tick(self) -> None:
        """Advance the countdown by one second.

        At zero the countdown stops and the pomodoro is counted, but the
        session stays open until :meth:`stop_task`.
        """
        state = self._state
        if not state.is_running or state.is_paused:
            return

        state.time_remaining -= 1
        if state.time_remaining <= 0:
            state.time_remaining = 0
            state.is_running = False
            state.completed_pomodoros += 1
            self.ticker.stop()
            logger.info(
                "countdown finished for session %s (%d completed)",
                self._session.id if self._session else None,
                state.completed_pomodoros,
            )
        self._notify()

    async def stop_task(
        self,
        achievement: str | None = None,
        pending: str | None = None,
        notes: str | None = None,
    ) -> TaskSession | None:
        """Close the open session, credit its task and reset the countdown.

        The duration is the whole minutes of wall-clock time since the session
        started; pauses are included. Returns None when no session is open,
        including when the held session was deleted or closed elsewhere.

        Raises:
            PersistenceError: If closing fails; the timer is left untouched
            CreditError: If the session closed but crediting failed; the timer
                is reset since the session can no longer be closed
        """
        session = self._session
        if session is None:
            return None

        now = self.clock.now()
        update = SessionUpdate(
            ended_at=now,
            duration_minutes=elapsed_whole_minutes(session.started_at, now),
            completed=self._state.time_remaining <= 0,
            achievement=achievement,
            pending=pending,
            notes=notes,
        )
        try:
            closed = await self.session_service.close(session.id, update)
        except CreditError:
            self._reset()
            self._notify()
            raise
        except (NotFoundError, InvalidStateError) as e:
            logger.warning("session %s is no longer open: %s", session.id, e)
            self._reset()
            self._notify()
            return None

        self._reset()
        logger.info(
            "stopped session %s (%d min, completed=%s)",
            closed.id,
            closed.duration_minutes,
            closed.completed,
        )
        self._notify()
        return closed

    async def complete_task(self, task_id: str) -> Task:
        """Mark a task done. An open session for it keeps running."""
        task = await self.task_service.complete(task_id)
        if self.active_task_id == task_id:
            logger.info("task %s completed while its session is still open", task_id)
        return task

    async def restore(self) -> TaskSession | None:
        """Adopt a session left open by a previous process.

        The countdown resumes from the work duration minus the wall-clock
        time elapsed since the session started, or lands in ``completed``.
        """
        if self._session is not None:
            return self._session

        session = await self.session_service.get_open_session()
        if session is None:
            return None

        total = self._work_minutes() * 60
        elapsed = int((self.clock.now() - session.started_at).total_seconds())
        remaining = total - elapsed

        self._session = session
        if remaining > 0:
            self._state = TimerState(
                is_running=True,
                time_remaining=remaining,
                total_time=total,
                session_type=session.type,
                completed_pomodoros=self._state.completed_pomodoros,
            )
            self.ticker.start(self.tick)
        else:
            self._state = TimerState(
                is_running=False,
                time_remaining=0,
                total_time=total,
                session_type=session.type,
                completed_pomodoros=self._state.completed_pomodoros + 1,
            )
        logger.info(
            "restored session %s for task %s (%ds left)",
            session.id,
            session.task_id,
            max(0, remaining),
        )
        self._notify()
        return session

    def shutdown(self) -> None:
        """Stop ticking. Persisted data is left as is."""
        self.ticker.stop()

    # ----- Internals -----
    def _work_minutes(self) -> int:
        return self.settings_service.get().work_duration

    def _reset(self) -> None:
        self.ticker.stop()
        self._session = None
        self._state = TimerState.for_duration(
            self._work_minutes(), completed_pomodoros=self._state.completed_pomodoros
        )
