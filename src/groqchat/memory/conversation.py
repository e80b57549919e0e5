"""Conversation buffer with durable persistence.

ConversationStore owns the active conversation. Every mutation writes the
full buffer and theme flag to storage before returning, then runs the
registered on-change hooks with a copy of the new buffer.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import TypeAdapter

from ..config import MESSAGES_KEY, THEME_KEY
from ..errors import StorageError
from ..llm.models import ChatMessage
from ..storage import KeyValueStore
from .models import MESSAGE_LIST, THEME_FLAG, HistoryEntry

logger = logging.getLogger(__name__)

BufferHook = Callable[[list[ChatMessage]], Awaitable[None]]


class ConversationStore:
    """Holds the current message buffer and the theme preference."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage
        self._messages: list[ChatMessage] = []
        self._dark_mode = False
        self._hooks: list[BufferHook] = []

    @property
    def messages(self) -> list[ChatMessage]:
        """Copy of the current buffer."""
        return list(self._messages)

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    def subscribe(self, hook: BufferHook) -> None:
        """Register a coroutine called after every buffer mutation."""
        self._hooks.append(hook)

    async def append(self, message: ChatMessage) -> None:
        """Add a message to the end of the buffer."""
        self._messages.append(message)
        await self._persist()
        await self._notify()

    async def reset(self) -> None:
        """Start a new, empty conversation. Saved history is untouched."""
        self._messages = []
        await self._persist()
        await self._notify()

    async def load(self, entry: HistoryEntry) -> None:
        """Replace the buffer with a copy of a saved conversation."""
        self._messages = list(entry.messages)
        await self._persist()
        await self._notify()

    async def set_dark_mode(self, enabled: bool) -> None:
        """Set and persist the theme flag."""
        self._dark_mode = enabled
        await self._persist()

    async def toggle_dark_mode(self) -> bool:
        """Flip the theme flag. Returns the new value."""
        await self.set_dark_mode(not self._dark_mode)
        return self._dark_mode

    async def restore(self) -> None:
        """Load the last persisted buffer and theme flag.

        Missing or unreadable data falls back to an empty buffer and the
        light theme; it is never an error.
        """
        self._messages = await self._read(MESSAGES_KEY, MESSAGE_LIST, [])
        self._dark_mode = await self._read(THEME_KEY, THEME_FLAG, False)
        logger.info(
            "Restored %d message(s), dark_mode=%s",
            len(self._messages),
            self._dark_mode,
        )

    async def _read(self, key: str, adapter: TypeAdapter, default: Any) -> Any:
        try:
            raw = await self._storage.get(key)
            if raw is None:
                return default
            return adapter.validate_json(raw)
        except (StorageError, ValueError) as e:
            logger.warning("Ignoring unreadable %s: %s", key, e)
            return default

    async def _persist(self) -> None:
        await self._storage.set(
            MESSAGES_KEY,
            MESSAGE_LIST.dump_json(self._messages).decode(),
        )
        await self._storage.set(
            THEME_KEY,
            THEME_FLAG.dump_json(self._dark_mode).decode(),
        )

    async def _notify(self) -> None:
        for hook in self._hooks:
            await hook(self.messages)
