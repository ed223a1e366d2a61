"""Read-only statistics over tasks and sessions."""

from __future__ import annotations

from collections import defaultdict

from focusnote.models import TaskStats
from focusnote.services.session_service import SessionService
from focusnote.services.task_service import TaskService


class StatsService:
    """Aggregates computed on demand from the current store contents."""

    def __init__(self, task_service: TaskService, session_service: SessionService):
        self.task_service = task_service
        self.session_service = session_service

    async def get_task_stats(self) -> TaskStats:
        """Count tasks by status."""
        stats = TaskStats()
        for task in await self.task_service.list_all():
            stats.total += 1
            setattr(stats, task.status, getattr(stats, task.status) + 1)
        return stats

    async def time_spent(self, task_id: str) -> int:
        """Minutes recorded across all sessions of *task_id*."""
        return await self.session_service.total_time_for_task(task_id)

    async def time_by_task(self) -> dict[str, int]:
        """Recorded minutes per task id, including orphaned sessions."""
        totals: dict[str, int] = defaultdict(int)
        for session in await self.session_service.list_all():
            totals[session.task_id] += session.duration_minutes
        return dict(totals)
