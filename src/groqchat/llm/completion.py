"""Completion client: one request per user turn.

Hides the details of how transport and HTTP failures are classified into
user-facing messages. Callers only ever see an assistant ChatMessage or a
CompletionError.
"""

import logging
from typing import Any

import openai

from ..config import DEFAULT_MODEL, MAX_TOKENS, TEMPERATURE
from ..errors import CompletionError, ErrorKind
from .base import LLMProvider
from .models import ChatMessage

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Invalid API key. Please check your Groq API key."
RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."
REMOTE_ERROR_TEMPLATE = "API Error: {}"
REMOTE_ERROR_FALLBACK = "Unknown error"
NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."
UNKNOWN_ERROR_MESSAGE = "Sorry, an error occurred."


def _remote_error_message(body: Any) -> str | None:
    """Extract the remote-supplied error message from a response body.

    The SDK usually unwraps the {"error": {...}} envelope already, but a
    raw envelope is accepted too.
    """
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if body.get("message"):
        return str(body["message"])
    return None


def classify_error(error: BaseException) -> CompletionError:
    """Map a provider failure to a CompletionError.

    Args:
        error: Exception raised while requesting a completion

    Returns:
        CompletionError carrying the ErrorKind and user-facing text
    """
    if isinstance(error, CompletionError):
        return error

    if isinstance(error, openai.APIStatusError):
        status = error.status_code
        if status == 401:
            return CompletionError(ErrorKind.UNAUTHORIZED, UNAUTHORIZED_MESSAGE, status)
        if status == 429:
            return CompletionError(ErrorKind.RATE_LIMITED, RATE_LIMITED_MESSAGE, status)
        detail = _remote_error_message(error.body) or REMOTE_ERROR_FALLBACK
        return CompletionError(
            ErrorKind.REMOTE_ERROR,
            REMOTE_ERROR_TEMPLATE.format(detail),
            status,
        )

    # Includes APITimeoutError: no HTTP response was obtained
    if isinstance(error, openai.APIConnectionError):
        return CompletionError(ErrorKind.NETWORK_ERROR, NETWORK_ERROR_MESSAGE)

    return CompletionError(ErrorKind.UNKNOWN_ERROR, UNKNOWN_ERROR_MESSAGE)


class CompletionClient:
    """Issues one chat-completion request per user turn.

    Generation parameters are fixed at construction; the whole buffer is
    sent on every call. No retries, no streaming.
    """

    def __init__(
        self,
        provider: LLMProvider,
        model: str | None = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> None:
        self._provider = provider
        self._model = model or getattr(provider, "model", None) or DEFAULT_MODEL
        self._max_tokens = max_tokens
        self._temperature = temperature

    @property
    def model(self) -> str:
        return self._model

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    async def complete(self, buffer: list[ChatMessage]) -> ChatMessage:
        """Request the assistant's reply to the conversation so far.

        Args:
            buffer: Full ordered conversation buffer

        Returns:
            Assistant-role ChatMessage with the first choice's content

        Raises:
            CompletionError: On any failure, classified by ErrorKind
        """
        logger.debug("Requesting completion: model=%s messages=%d", self._model, len(buffer))
        try:
            response = await self._provider.chat_completion(
                list(buffer),
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            error = classify_error(e)
            logger.warning(
                "Completion failed: kind=%s status=%s (%s)",
                error.kind.value,
                error.status_code,
                type(e).__name__,
            )
            raise error from e

        if not response.content:
            logger.warning("Completion returned no content")
            raise CompletionError(ErrorKind.UNKNOWN_ERROR, UNKNOWN_ERROR_MESSAGE)

        if response.usage:
            logger.debug("Completion usage: %s", response.usage)
        return ChatMessage.assistant(response.content)
