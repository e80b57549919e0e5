"""Data models for conversation memory.

These models define the structure of saved conversations and their
serialized form, independent of the storage backend used.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..config import DEFAULT_TITLE, TITLE_ELLIPSIS, TITLE_LENGTH
from ..llm.models import ChatMessage


def derive_title(messages: list[ChatMessage] | tuple[ChatMessage, ...]) -> str:
    """Title for a conversation: leading text of its first message.

    Args:
        messages: Conversation snapshot

    Returns:
        First TITLE_LENGTH characters of the first message followed by the
        ellipsis marker, or DEFAULT_TITLE for an empty conversation
    """
    if not messages:
        return DEFAULT_TITLE
    return messages[0].content[:TITLE_LENGTH] + TITLE_ELLIPSIS


class HistoryEntry(BaseModel):
    """Snapshot of a past or ongoing conversation.

    Identity across saves is heuristic, see HistoryManager.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Creation timestamp in milliseconds")
    title: str = Field(description="Leading text of the first message")
    messages: tuple[ChatMessage, ...] = Field(description="Snapshot of the buffer at save time")
    timestamp: datetime = Field(description="Save time")

    @property
    def first_content(self) -> str | None:
        """Content of the first message, None for an empty snapshot."""
        return self.messages[0].content if self.messages else None

    def is_same_conversation(self, other: "HistoryEntry") -> bool:
        """Heuristic identity: same message count and same first message."""
        return (
            len(self.messages) == len(other.messages)
            and self.first_content == other.first_content
        )

    def is_extended_by(self, other: "HistoryEntry") -> bool:
        """True if other continues this conversation (this snapshot is its prefix)."""
        return (
            0 < len(self.messages) < len(other.messages)
            and other.messages[: len(self.messages)] == self.messages
        )


MESSAGE_LIST = TypeAdapter(list[ChatMessage])
HISTORY_LIST = TypeAdapter(list[HistoryEntry])
THEME_FLAG = TypeAdapter(bool)
