"""Chat completions over the OpenAI SDK.

Any OpenAI-compatible endpoint works through base_url; GroqProvider is
this class pointed at Groq.
"""

from typing import Any

from openai import AsyncOpenAI

from ...config import TEMPERATURE
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


class OpenAIProvider(LLMProvider):
    """Provider backed by AsyncOpenAI.

    The bearer key is handed to the SDK and kept nowhere else. SDK retries
    are off unless max_retries is passed, so one turn is one HTTP request.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Create the SDK client.

        Args:
            api_key: Bearer credential
            model: Default model id
            base_url: API root, None for api.openai.com
            organization: Optional OpenAI organization id
            **client_kwargs: Passed to AsyncOpenAI (timeout, http_client, max_retries)
        """
        client_kwargs.setdefault("max_retries", 0)
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = TEMPERATURE,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        request: dict[str, Any] = {
            "model": model or self._model,
            "messages": [message.to_wire() for message in messages],
            "temperature": temperature,
            **kwargs
        }
        if max_tokens is not None:
            request["max_tokens"] = max_tokens

        completion = await self._client.chat.completions.create(**request)

        usage = completion.usage.model_dump(
            include={"prompt_tokens", "completion_tokens", "total_tokens"}
        ) if completion.usage else None
        reply = completion.choices[0].message.content if completion.choices else None
        return LLMResponse(
            content=reply or "",
            model=completion.model or request["model"],
            usage=usage,
        )

    async def close(self) -> None:
        await self._client.close()
