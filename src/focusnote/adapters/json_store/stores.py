"""JSON key-value implementations of TaskStore and SessionStore."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from focusnote.adapters.json_store.kv import JsonKeyValueStore
from focusnote.models import NotFoundError, PersistenceError, Task, TaskSession
from focusnote.repositories import SessionStore, TaskStore

TASKS_KEY = "tasks"
SESSIONS_KEY = "sessions"

ModelT = TypeVar("ModelT", bound=BaseModel)


class _JsonCollection(Generic[ModelT]):
    """A list of records kept under one key of a JsonKeyValueStore."""

    model: type[ModelT]
    key: str
    entity: str
    order_by: str

    def __init__(self, directory: str | Path, kv: JsonKeyValueStore | None = None):
        self.directory = Path(directory)
        self.kv = kv or JsonKeyValueStore(self.directory)

    def _load(self) -> list[ModelT]:
        raw = self.kv.get(self.key, default=[])
        if not isinstance(raw, list):
            raise PersistenceError(f"Document '{self.key}' is not a list")
        try:
            return [self.model.model_validate(item) for item in raw]
        except ValidationError as e:
            raise PersistenceError(f"Invalid record in '{self.key}': {e}") from e

    def _save(self, records: list[ModelT]) -> None:
        self.kv.set(self.key, [r.model_dump(mode="json") for r in records])

    def _index_of(self, records: list[ModelT], record_id: str) -> int:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        raise NotFoundError(self.entity, record_id)

    async def list_all(self) -> list[ModelT]:
        return sorted(self._load(), key=lambda r: getattr(r, self.order_by))

    async def get(self, record_id: str) -> ModelT:
        records = self._load()
        return records[self._index_of(records, record_id)]

    async def add(self, record: ModelT) -> ModelT:
        records = self._load()
        if any(r.id == record.id for r in records):
            raise PersistenceError(f"Duplicate {self.entity} id: {record.id}")
        records.append(record)
        self._save(records)
        return record

    async def update(self, record_id: str, patch: dict[str, Any]) -> ModelT:
        records = self._load()
        index = self._index_of(records, record_id)

        merged = {**records[index].model_dump(), **patch, "id": record_id}
        updated = self.model.model_validate(merged)

        records[index] = updated
        self._save(records)
        return updated

    async def delete(self, record_id: str) -> None:
        records = self._load()
        del records[self._index_of(records, record_id)]
        self._save(records)


class JsonTaskStore(_JsonCollection[Task], TaskStore):
    """Task store persisted as ``tasks.json``."""

    model = Task
    key = TASKS_KEY
    entity = "task"
    order_by = "created_at"


class JsonSessionStore(_JsonCollection[TaskSession], SessionStore):
    """Session store persisted as ``sessions.json``."""

    model = TaskSession
    key = SESSIONS_KEY
    entity = "session"
    order_by = "started_at"
