"""Conversation memory module for groqchat.

Provides the conversation buffer and the bounded history of saved
conversations, both persisted through a KeyValueStore.
"""

from .conversation import ConversationStore
from .history import HistoryManager
from .models import HistoryEntry, derive_title

__all__ = [
    "ConversationStore",
    "HistoryEntry",
    "HistoryManager",
    "derive_title",
]
