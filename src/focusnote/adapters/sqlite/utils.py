"""Utility functions for SQLite adapter."""

from __future__ import annotations

import functools
import sqlite3
from collections.abc import Callable
from datetime import datetime
from typing import Any

from focusnote.models.exceptions import PersistenceError


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def to_db_value(value: Any) -> Any:
    """Convert a model value into something sqlite3 can bind."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return int(value)
    return value


def build_update_clause(
    updates: dict[str, Any], allowed: frozenset[str]
) -> tuple[str, list[Any]]:
    """Build SQL UPDATE SET clause from updates dictionary.

    Unlike a plain filter, ``None`` values are kept so optional columns can
    be cleared. Keys outside *allowed* are ignored.

    Returns:
        Tuple of (SET clause string, parameters list)
    """
    set_parts = []
    params = []

    for key, value in updates.items():
        if key not in allowed:
            continue
        set_parts.append(f"{key} = ?")
        params.append(to_db_value(value))

    return ", ".join(set_parts), params


def translate_errors(func: Callable) -> Callable:
    """Re-raise sqlite3 errors from an async store method as PersistenceError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except sqlite3.Error as e:
            raise PersistenceError(f"SQLite {func.__name__} failed: {e}") from e

    return wrapper
