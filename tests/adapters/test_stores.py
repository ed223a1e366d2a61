"""Contract tests run against both the JSON and the SQLite stores."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from focusnote.models import NotFoundError, Task, TaskSession

_NOW = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def _task(task_id: str, offset: int = 0, **kwargs) -> Task:
    created = _NOW + timedelta(seconds=offset)
    return Task(id=task_id, title=f"Task {task_id}", created_at=created, updated_at=created, **kwargs)


def _session(session_id: str, task_id: str = "t1", **kwargs) -> TaskSession:
    return TaskSession(id=session_id, task_id=task_id, started_at=_NOW, **kwargs)


# ---------------------------------------------------------------------------
# TaskStore
# ---------------------------------------------------------------------------


class TestTaskStore:
    @pytest.mark.asyncio
    async def test_add_and_get(self, strategy):
        store = strategy.task_store
        await store.add(_task("t1", tags=["a", "b"], note_id="n1"))

        task = await store.get("t1")
        assert task.title == "Task t1"
        assert task.note_id == "n1"
        assert sorted(task.tags) == ["a", "b"]
        assert task.created_at == _NOW

    @pytest.mark.asyncio
    async def test_get_unknown_raises(self, strategy):
        with pytest.raises(NotFoundError):
            await strategy.task_store.get("missing")

    @pytest.mark.asyncio
    async def test_list_all_in_creation_order(self, strategy):
        store = strategy.task_store
        await store.add(_task("t2", offset=1))
        await store.add(_task("t1", offset=0))

        assert [t.id for t in await store.list_all()] == ["t1", "t2"]

    @pytest.mark.asyncio
    async def test_update_merges_patch(self, strategy):
        store = strategy.task_store
        await store.add(_task("t1", description="old"))

        updated = await store.update("t1", {"status": "done", "actual_minutes": 5})

        assert updated.status == "done"
        assert updated.actual_minutes == 5
        assert updated.description == "old"

    @pytest.mark.asyncio
    async def test_update_replaces_tags(self, strategy):
        store = strategy.task_store
        await store.add(_task("t1", tags=["a"]))

        updated = await store.update("t1", {"tags": ["b", "c"]})

        assert sorted(updated.tags) == ["b", "c"]

    @pytest.mark.asyncio
    async def test_update_can_clear_optional_field(self, strategy):
        store = strategy.task_store
        await store.add(_task("t1", description="text"))

        updated = await store.update("t1", {"description": None})

        assert updated.description is None

    @pytest.mark.asyncio
    async def test_update_unknown_raises(self, strategy):
        with pytest.raises(NotFoundError):
            await strategy.task_store.update("missing", {"title": "x"})

    @pytest.mark.asyncio
    async def test_delete(self, strategy):
        store = strategy.task_store
        await store.add(_task("t1"))

        await store.delete("t1")

        assert await store.list_all() == []
        with pytest.raises(NotFoundError):
            await store.delete("t1")


# ---------------------------------------------------------------------------
# SessionStore
# ---------------------------------------------------------------------------


class TestSessionStore:
    @pytest.mark.asyncio
    async def test_add_and_get(self, strategy):
        store = strategy.session_store
        await store.add(_session("s1"))

        session = await store.get("s1")
        assert session.task_id == "t1"
        assert session.is_open
        assert session.completed is False

    @pytest.mark.asyncio
    async def test_session_does_not_require_existing_task(self, strategy):
        await strategy.session_store.add(_session("s1", task_id="deleted-task"))
        assert (await strategy.session_store.get("s1")).task_id == "deleted-task"

    @pytest.mark.asyncio
    async def test_update_closes_session(self, strategy):
        store = strategy.session_store
        await store.add(_session("s1"))

        closed = await store.update(
            "s1",
            {
                "ended_at": _NOW + timedelta(minutes=25),
                "duration_minutes": 25,
                "completed": True,
                "achievement": "Wrote report",
            },
        )

        assert not closed.is_open
        assert closed.completed is True
        assert closed.duration_minutes == 25
        assert closed.achievement == "Wrote report"
        assert closed.started_at == _NOW

    @pytest.mark.asyncio
    async def test_get_and_delete_unknown_raise(self, strategy):
        with pytest.raises(NotFoundError):
            await strategy.session_store.get("missing")
        with pytest.raises(NotFoundError):
            await strategy.session_store.delete("missing")

    @pytest.mark.asyncio
    async def test_list_all(self, strategy):
        store = strategy.session_store
        await store.add(_session("s1"))
        await store.add(_session("s2", task_id="t2"))

        assert {s.id for s in await store.list_all()} == {"s1", "s2"}
