from typing import Any

from ...config import DEFAULT_MODEL, GROQ_BASE_URL
from .openai import OpenAIProvider


class GroqProvider(OpenAIProvider):
    """Groq LLM provider using the OpenAI-compatible API.

    Hidden design decisions:
    - Groq endpoint (via OpenAI SDK)
    - Default model selection
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = GROQ_BASE_URL,
        **client_kwargs: Any
    ):
        """Initialize Groq provider.

        Args:
            api_key: Groq API key
            model: Default model to use (default: llama-3.1-8b-instant)
            base_url: Groq API base URL (default: https://api.groq.com/openai/v1)
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(
            api_key=api_key,
            model=model,
            base_url=base_url,
            **client_kwargs
        )
