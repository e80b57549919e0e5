"""Application state and the send-turn control flow.

ChatSession is the explicit state object the view layer owns. It wires
ConversationStore to HistoryManager through an on-change hook and runs one
completion per user turn, serialized by a busy flag.
"""

import logging

from ..config import HISTORY_CAPACITY
from ..errors import CompletionError, SessionBusyError
from ..llm.completion import CompletionClient
from ..llm.models import ChatMessage
from ..memory import ConversationStore, HistoryEntry, HistoryManager
from ..storage import KeyValueStore

logger = logging.getLogger(__name__)


class ChatSession:
    """Conversation buffer, saved history and completion client for one user.

    Read access goes through the properties; every write goes through a
    method that persists before returning.

    Example:
        session = ChatSession(storage, CompletionClient(provider))
        await session.start()
        reply = await session.send_message("Hi")
    """

    def __init__(
        self,
        storage: KeyValueStore,
        client: CompletionClient,
        history_capacity: int = HISTORY_CAPACITY,
    ) -> None:
        self._storage = storage
        self._client = client
        self._store = ConversationStore(storage)
        self._history = HistoryManager(storage, capacity=history_capacity)
        self._store.subscribe(self._history.on_buffer_changed)
        self._busy = False

    @property
    def messages(self) -> list[ChatMessage]:
        return self._store.messages

    @property
    def history(self) -> list[HistoryEntry]:
        return self._history.list_all()

    @property
    def dark_mode(self) -> bool:
        return self._store.dark_mode

    @property
    def busy(self) -> bool:
        """True while a completion request is in flight."""
        return self._busy

    @property
    def client(self) -> CompletionClient:
        return self._client

    async def start(self) -> None:
        """Connect storage and restore the previous session."""
        await self._storage.connect()
        await self._store.restore()
        await self._history.restore()

    async def close(self) -> None:
        """Release storage and the LLM client."""
        await self._storage.disconnect()
        await self._client.provider.close()

    async def send_message(self, text: str) -> ChatMessage | None:
        """Run one user turn.

        Appends the user message, requests a completion for the whole
        buffer and appends the reply. Completion failures become an
        assistant message carrying the error text.

        Args:
            text: User input

        Returns:
            The appended assistant message, or None for blank input

        Raises:
            SessionBusyError: If a previous turn has not finished
        """
        if not text.strip():
            return None
        if self._busy:
            raise SessionBusyError("A message is already being sent")

        self._busy = True
        try:
            await self._store.append(ChatMessage.user(text))
            try:
                reply = await self._client.complete(self._store.messages)
            except CompletionError as e:
                logger.info("Turn failed: %s", e.kind.value)
                reply = ChatMessage.assistant(e.user_message)
            await self._store.append(reply)
            return reply
        finally:
            self._busy = False

    async def new_chat(self) -> None:
        """Start an empty conversation; the current one stays in history."""
        await self._store.reset()

    async def load_conversation(self, entry_id: int) -> HistoryEntry:
        """Make a saved conversation the active one.

        Raises:
            HistoryEntryNotFoundError: If no entry has this id
        """
        entry = self._history.load(entry_id)
        await self._store.load(entry)
        return entry

    async def toggle_theme(self) -> bool:
        """Flip dark mode. Returns the new value."""
        return await self._store.toggle_dark_mode()

    async def clear_history(self) -> None:
        """Forget all saved conversations and the active buffer."""
        await self._history.clear()
        await self._store.reset()
