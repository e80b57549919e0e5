"""Pytest configuration and shared fixtures."""
import asyncio
import json
import os
from typing import Any

import httpx
import pytest

from groqchat.chat import ChatSession
from groqchat.llm import ChatMessage, CompletionClient, GroqProvider, LLMProvider, LLMResponse
from groqchat.storage import InMemoryKeyValueStore

COMPLETIONS_URL = "https://api.groq.com/openai/v1/chat/completions"


class FakeProvider(LLMProvider):
    """LLM provider returning canned replies or raising a canned error."""

    def __init__(self, reply: str = "Hello", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[list[ChatMessage]] = []
        self.release: asyncio.Event | None = None
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append(list(messages))
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=model or self.model)

    async def close(self) -> None:
        self.closed = True


def completion_body(content: str | None = "Hello") -> dict[str, Any]:
    """Minimal chat.completion response body."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "llama-3.1-8b-instant",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


class RecordingTransport:
    """httpx handler that records requests and replays a fixed response."""

    def __init__(self, status: int = 200, body: Any = None, error: Exception | None = None):
        self.status = status
        self.body = completion_body() if body is None and status == 200 else body
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, str):
            return httpx.Response(self.status, text=self.body)
        return httpx.Response(self.status, json=self.body)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def make_groq_provider(transport: RecordingTransport) -> GroqProvider:
    """GroqProvider whose HTTP traffic goes to the recording transport."""
    return GroqProvider(
        api_key="test-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(transport)),
    )


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "groq": os.getenv("GROQ_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def storage():
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
async def session(storage, fake_provider):
    """Started chat session backed by memory storage and a fake provider."""
    chat_session = ChatSession(storage=storage, client=CompletionClient(fake_provider))
    await chat_session.start()
    return chat_session


@pytest.fixture
def long_first_message():
    """First message longer than the title length."""
    return "The quick brown fox jumps over the lazy dog"
