"""Abstract base class for durable key-value storage.

This module defines the interface the conversation core persists through.
The abstraction hides:
- Storage medium (process memory, SQLite file)
- Connection management
- How values are laid out on disk

Values are opaque strings; callers own serialization.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract durable key-value store.

    Implementations raise StorageError for backend failures.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the storage backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the storage backend gracefully."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Read the value stored under key, or None if absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "KeyValueStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
