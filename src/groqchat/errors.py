"""Exception hierarchy for groqchat.

Completion failures carry an ErrorKind and the text shown to the user;
the session turns them into assistant messages instead of letting them
reach the UI.
"""

from enum import Enum


class GroqChatError(Exception):
    """Base class for all groqchat errors."""


class StorageError(GroqChatError):
    """A durable storage backend failed to read or write."""


class HistoryEntryNotFoundError(GroqChatError, LookupError):
    """No history entry exists with the requested id."""

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"History entry not found: {entry_id}")
        self.entry_id = entry_id


class SessionBusyError(GroqChatError):
    """A completion request is already in flight."""


class ErrorKind(str, Enum):
    """Classification of completion failures."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    REMOTE_ERROR = "remote_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN_ERROR = "unknown_error"


class CompletionError(GroqChatError):
    """A completion request failed.

    Attributes:
        kind: Failure classification
        user_message: Human-readable text for the conversation view
        status_code: HTTP status reported by the remote, if any
    """

    def __init__(
        self,
        kind: ErrorKind,
        user_message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(user_message)
        self.kind = kind
        self.user_message = user_message
        self.status_code = status_code
