"""Provider interface for chat-completion backends.

This module hides the design decision of which vendor answers a turn.
A provider turns a conversation buffer into one reply and nothing more:
no retries, no streaming, no error translation. Vendor exceptions reach
CompletionClient untouched, which maps them to an ErrorKind.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..config import TEMPERATURE
from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """One remote chat-completion endpoint.

    Usable as an async context manager so the HTTP client is released:

        async with GroqProvider(api_key=key) as provider:
            reply = await provider.chat_completion([ChatMessage.user("Hi")])
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model id used when a request does not name one."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = TEMPERATURE,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Request the next assistant turn for a conversation.

        Args:
            messages: Whole conversation, oldest first
            model: Overrides the provider's model
            temperature: Sampling temperature
            max_tokens: Reply length cap, None for the remote default
            **kwargs: Extra request fields passed through to the vendor

        Returns:
            LLMResponse with the first choice's text (may be empty)
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        # httpx may report a closed loop when the app shuts down first
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
