"""Bounded list of saved conversations.

HistoryManager keeps the most recent conversations, newest first. A saved
conversation is updated in place instead of being saved again. There is no
stable conversation id, so identity is heuristic:

1. an entry with the same message count and the same first message is the
   same conversation;
2. otherwise, an entry whose snapshot is a strict prefix of the buffer is
   the conversation the buffer grew from.

Rule 1 alone would save every new turn as a new entry, because each save
changes the message count. Rule 2 exists only so that a growing
conversation (`[Hi]` then `[Hi, Hello]`) keeps updating one entry; it is
not a general identity scheme and never takes precedence over rule 1.

Two distinct conversations that share their first message and length are
merged; that is an accepted limitation.
"""

import logging
from datetime import datetime, timezone

from ..config import HISTORY_CAPACITY, HISTORY_KEY
from ..errors import HistoryEntryNotFoundError, StorageError
from ..llm.models import ChatMessage
from ..storage import KeyValueStore
from .models import HISTORY_LIST, HistoryEntry, derive_title

logger = logging.getLogger(__name__)


class HistoryManager:
    """Derives, deduplicates, evicts and persists history entries."""

    def __init__(self, storage: KeyValueStore, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._storage = storage
        self._capacity = capacity
        self._entries: list[HistoryEntry] = []
        self._last_id = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def list_all(self) -> list[HistoryEntry]:
        """Saved conversations, most recent first."""
        return list(self._entries)

    def load(self, entry_id: int) -> HistoryEntry:
        """Look up a saved conversation by id.

        Raises:
            HistoryEntryNotFoundError: If no entry has this id
        """
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise HistoryEntryNotFoundError(entry_id)

    def _next_id(self, now: datetime) -> int:
        # Millisecond timestamp, bumped so ids stay unique within a burst
        entry_id = max(int(now.timestamp() * 1000), self._last_id + 1)
        self._last_id = entry_id
        return entry_id

    def _find_match(self, candidate: HistoryEntry) -> int | None:
        """Position of the entry the candidate replaces, if any."""
        for index, entry in enumerate(self._entries):
            if entry.is_same_conversation(candidate):
                return index
        for index, entry in enumerate(self._entries):
            if entry.is_extended_by(candidate):
                return index
        return None

    async def derive_and_save(self, buffer: list[ChatMessage]) -> HistoryEntry:
        """Save the buffer as a history entry.

        Replaces the matching entry in place if there is one, otherwise
        inserts at the front and evicts the oldest entries beyond capacity.
        The list is persisted either way.

        Args:
            buffer: Current conversation buffer

        Returns:
            The newly created entry
        """
        now = datetime.now(timezone.utc)
        snapshot = tuple(buffer)
        candidate = HistoryEntry(
            id=self._next_id(now),
            title=derive_title(snapshot),
            messages=snapshot,
            timestamp=now,
        )

        index = self._find_match(candidate)
        if index is not None:
            self._entries[index] = candidate
            logger.debug("Updated history entry at position %d", index)
        else:
            self._entries = [candidate, *self._entries][: self._capacity]
            logger.debug("Added history entry (%d saved)", len(self._entries))

        await self._persist()
        return candidate

    async def on_buffer_changed(self, buffer: list[ChatMessage]) -> None:
        """ConversationStore hook: save non-empty buffers."""
        if buffer:
            await self.derive_and_save(buffer)

    async def clear(self) -> None:
        """Remove all saved conversations."""
        self._entries = []
        await self._persist()

    async def restore(self) -> None:
        """Load the persisted history list.

        Unreadable data yields an empty history.
        """
        try:
            raw = await self._storage.get(HISTORY_KEY)
            entries = HISTORY_LIST.validate_json(raw) if raw else []
        except (StorageError, ValueError) as e:
            logger.warning("Ignoring unreadable %s: %s", HISTORY_KEY, e)
            entries = []

        self._entries = entries[: self._capacity]
        self._last_id = max((entry.id for entry in self._entries), default=0)
        logger.info("Restored %d history entries", len(self._entries))

    async def _persist(self) -> None:
        await self._storage.set(HISTORY_KEY, HISTORY_LIST.dump_json(self._entries).decode())
