"""JSON key-value storage adapter."""

from .kv import JsonKeyValueStore
from .stores import JsonSessionStore, JsonTaskStore

__all__ = ["JsonKeyValueStore", "JsonTaskStore", "JsonSessionStore"]
