"""Durable key-value storage for conversation state."""

from .base import KeyValueStore
from .factory import create_storage_backend
from .in_memory import InMemoryKeyValueStore
from .sqlite import SQLiteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SQLiteKeyValueStore",
    "create_storage_backend",
]
