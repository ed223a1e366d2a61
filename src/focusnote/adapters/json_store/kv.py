"""File-backed key-value store.

Each key maps to one JSON document in the store directory, mirroring a
browser-local key-value store: reads load the whole document, writes replace
it atomically.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from focusnote.models.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class JsonKeyValueStore:
    """Key-value store persisting each value as ``<key>.json``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        """Load the value stored under *key*, or *default* if missing.

        Raises:
            PersistenceError: If the file cannot be read or is not valid JSON
        """
        path = self.path_for(key)
        if not path.exists():
            return default

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Corrupted document {path}: {e}") from e
        except OSError as e:
            raise PersistenceError(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        """Replace the value stored under *key*.

        The document is written to a temporary file and moved into place so
        a crash never leaves a half-written file behind.

        Raises:
            PersistenceError: If the file cannot be written
        """
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(value, f, indent=2)
                os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e

    def delete(self, key: str) -> None:
        """Remove the document stored under *key*, if any."""
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot delete {self.path_for(key)}: {e}") from e
