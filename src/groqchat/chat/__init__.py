"""Chat session orchestration."""

from .session import ChatSession

__all__ = ["ChatSession"]
