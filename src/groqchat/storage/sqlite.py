"""SQLite key-value backend.

Provides persistent storage across sessions in a single SQLite file.
Uses aiosqlite for async access.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from ..errors import StorageError
from .base import KeyValueStore

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed key-value store.

    Each key holds a full snapshot; writes are committed before returning.
    """

    def __init__(self, path: str | Path = "./groqchat.db"):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database file and create the schema."""
        if self._connection is not None:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._db_path)
            await self._connection.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            await self._connection.commit()
        except (aiosqlite.Error, OSError) as e:
            raise StorageError(f"Failed to open {self._db_path}: {e}") from e
        logger.debug("Connected to %s", self._db_path)

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StorageError("SQLite store is not connected")
        return self._connection

    async def get(self, key: str) -> str | None:
        connection = self._require_connection()
        try:
            async with connection.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,)
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        connection = self._require_connection()
        now = datetime.now(timezone.utc).isoformat()
        try:
            await connection.execute("""
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, value, now))
            await connection.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e

    async def delete(self, key: str) -> None:
        connection = self._require_connection()
        try:
            await connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            await connection.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to delete {key!r}: {e}") from e

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
