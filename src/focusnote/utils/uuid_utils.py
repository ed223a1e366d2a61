"""UUID utility functions: generation, short display and prefix resolution."""

from __future__ import annotations

import re
import uuid

from focusnote.models.exceptions import InvalidStateError, NotFoundError

UUID_RELAXED_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def generate_uuid() -> str:
    """Generate a new UUID as string."""
    return str(uuid.uuid4())


def is_full_uuid(value: str) -> bool:
    return len(value) == 36 and UUID_RELAXED_PATTERN.match(value) is not None


def shorten_uuid(value: str, length: int = 8) -> str:
    """First *length* characters of an id, for display in lists."""
    return value[:length]


def resolve_id_prefix(prefix: str, ids: list[str], entity: str = "task") -> str:
    """Resolve a full id or unique prefix against a list of known ids.

    Raises:
        NotFoundError: If no id starts with *prefix*
        InvalidStateError: If more than one id starts with *prefix*
    """
    prefix = prefix.strip().lower()
    if prefix in ids:
        return prefix

    matches = [i for i in ids if i.lower().startswith(prefix)]
    if not matches:
        raise NotFoundError(entity, prefix)
    if len(matches) > 1:
        shown = ", ".join(shorten_uuid(m, 12) for m in matches[:5])
        raise InvalidStateError(
            f"Ambiguous {entity} id '{prefix}' matches {len(matches)} records: {shown}"
        )
    return matches[0]


async def resolve_task_id(task_service, short_or_full_id: str) -> str:
    """Resolve a short or full task id to the full id.

    Args:
        task_service: TaskService instance
        short_or_full_id: Either a full UUID or a unique prefix of one

    Raises:
        NotFoundError: If no task matches
        InvalidStateError: If the prefix is ambiguous
    """
    if is_full_uuid(short_or_full_id.strip()):
        task = await task_service.get(short_or_full_id.strip().lower())
        return task.id
    tasks = await task_service.list_all()
    return resolve_id_prefix(short_or_full_id, [t.id for t in tasks], entity="task")
