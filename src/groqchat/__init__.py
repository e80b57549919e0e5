"""
groqchat: a terminal and browser chat client for OpenAI-compatible LLM APIs.

Keeps the active conversation and a bounded list of saved conversations in
durable key-value storage, and sends one completion request per user turn.
"""

__version__ = "0.1.0"

from .chat import ChatSession
from .errors import (
    CompletionError,
    ErrorKind,
    GroqChatError,
    HistoryEntryNotFoundError,
    SessionBusyError,
    StorageError,
)
from .llm import ChatMessage, CompletionClient, Role, create_llm_provider
from .memory import ConversationStore, HistoryEntry, HistoryManager
from .storage import KeyValueStore, create_storage_backend

__all__ = [
    "ChatMessage",
    "ChatSession",
    "CompletionClient",
    "CompletionError",
    "ConversationStore",
    "ErrorKind",
    "GroqChatError",
    "HistoryEntry",
    "HistoryEntryNotFoundError",
    "HistoryManager",
    "KeyValueStore",
    "Role",
    "SessionBusyError",
    "StorageError",
    "create_llm_provider",
    "create_storage_backend",
]
