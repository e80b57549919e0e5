"""Tests for the completion client, error classification and provider wiring."""
import httpx
import openai
import pytest

from groqchat.errors import CompletionError, ErrorKind
from groqchat.llm import (
    ChatMessage,
    CompletionClient,
    GroqProvider,
    OpenAIProvider,
    classify_error,
    create_llm_provider,
)
from groqchat.llm.completion import (
    NETWORK_ERROR_MESSAGE,
    RATE_LIMITED_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
)

from conftest import COMPLETIONS_URL, FakeProvider, RecordingTransport, completion_body, make_groq_provider


def status_error(status: int, body=None) -> openai.APIStatusError:
    request = httpx.Request("POST", COMPLETIONS_URL)
    response = httpx.Response(status, request=request)
    return openai.APIStatusError(f"Error code: {status}", response=response, body=body)


class TestClassifyError:
    """Tests for mapping provider exceptions to ErrorKind."""

    def test_unauthorized(self):
        error = classify_error(status_error(401))
        assert error.kind is ErrorKind.UNAUTHORIZED
        assert error.user_message == UNAUTHORIZED_MESSAGE
        assert error.status_code == 401

    def test_rate_limited(self):
        error = classify_error(status_error(429))
        assert error.kind is ErrorKind.RATE_LIMITED
        assert error.user_message == RATE_LIMITED_MESSAGE

    def test_remote_error_uses_remote_message(self):
        error = classify_error(status_error(500, body={"message": "model overloaded"}))
        assert error.kind is ErrorKind.REMOTE_ERROR
        assert error.user_message == "API Error: model overloaded"
        assert error.status_code == 500

    def test_remote_error_accepts_error_envelope(self):
        error = classify_error(status_error(400, body={"error": {"message": "bad request"}}))
        assert error.user_message == "API Error: bad request"

    def test_remote_error_without_message(self):
        error = classify_error(status_error(503, body="Service Unavailable"))
        assert error.kind is ErrorKind.REMOTE_ERROR
        assert error.user_message == "API Error: Unknown error"

    def test_connection_error_is_network(self):
        request = httpx.Request("POST", COMPLETIONS_URL)
        error = classify_error(openai.APIConnectionError(request=request))
        assert error.kind is ErrorKind.NETWORK_ERROR
        assert error.user_message == NETWORK_ERROR_MESSAGE
        assert error.status_code is None

    def test_timeout_is_network(self):
        request = httpx.Request("POST", COMPLETIONS_URL)
        error = classify_error(openai.APITimeoutError(request=request))
        assert error.kind is ErrorKind.NETWORK_ERROR

    def test_anything_else_is_unknown(self):
        error = classify_error(RuntimeError("boom"))
        assert error.kind is ErrorKind.UNKNOWN_ERROR
        assert error.user_message == UNKNOWN_ERROR_MESSAGE

    def test_completion_error_passes_through(self):
        original = CompletionError(ErrorKind.RATE_LIMITED, "slow down", 429)
        assert classify_error(original) is original


class TestCompletionClient:
    """Tests for CompletionClient with a fake provider."""

    async def test_returns_assistant_message(self):
        provider = FakeProvider(reply="Hello there")
        client = CompletionClient(provider)

        reply = await client.complete([ChatMessage.user("Hi")])

        assert reply == ChatMessage.assistant("Hello there")

    async def test_sends_whole_buffer(self):
        provider = FakeProvider()
        client = CompletionClient(provider)
        buffer = [
            ChatMessage.user("Hi"),
            ChatMessage.assistant("Hello"),
            ChatMessage.user("How are you?"),
        ]

        await client.complete(buffer)

        assert provider.calls == [buffer]

    async def test_empty_reply_is_unknown_error(self):
        client = CompletionClient(FakeProvider(reply=""))

        with pytest.raises(CompletionError) as exc_info:
            await client.complete([ChatMessage.user("Hi")])

        assert exc_info.value.kind is ErrorKind.UNKNOWN_ERROR

    async def test_provider_exception_is_classified(self):
        client = CompletionClient(FakeProvider(error=status_error(429)))

        with pytest.raises(CompletionError) as exc_info:
            await client.complete([ChatMessage.user("Hi")])

        assert exc_info.value.kind is ErrorKind.RATE_LIMITED

    def test_model_defaults_to_provider_model(self):
        assert CompletionClient(FakeProvider()).model == "fake-model"
        assert CompletionClient(FakeProvider(), model="other").model == "other"


class TestGroqWire:
    """Tests for the HTTP request and response handling against a mock transport."""

    async def test_request_shape(self):
        transport = RecordingTransport()
        client = CompletionClient(make_groq_provider(transport))

        reply = await client.complete([ChatMessage.user("Hi")])

        assert reply.content == "Hello"
        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == COMPLETIONS_URL
        assert request.headers["authorization"] == "Bearer test-key"
        assert transport.last_json == {
            "model": "llama-3.1-8b-instant",
            "messages": [{"role": "user", "content": "Hi"}],
            "max_tokens": 1000,
            "temperature": 0.7,
        }

    async def test_message_order_preserved(self):
        transport = RecordingTransport()
        client = CompletionClient(make_groq_provider(transport))
        buffer = [
            ChatMessage.user("one"),
            ChatMessage.assistant("two"),
            ChatMessage.user("three"),
        ]

        await client.complete(buffer)

        assert [m["content"] for m in transport.last_json["messages"]] == ["one", "two", "three"]
        assert [m["role"] for m in transport.last_json["messages"]] == ["user", "assistant", "user"]

    @pytest.mark.parametrize(
        "status,body,kind,text",
        [
            (401, {"error": {"message": "Invalid API Key"}}, ErrorKind.UNAUTHORIZED, UNAUTHORIZED_MESSAGE),
            (429, {"error": {"message": "Too many"}}, ErrorKind.RATE_LIMITED, RATE_LIMITED_MESSAGE),
            (500, {"error": {"message": "boom"}}, ErrorKind.REMOTE_ERROR, "API Error: boom"),
            (404, {"error": {"message": "model not found"}}, ErrorKind.REMOTE_ERROR, "API Error: model not found"),
            (502, "<html>Bad Gateway</html>", ErrorKind.REMOTE_ERROR, "API Error: Unknown error"),
        ],
    )
    async def test_http_errors(self, status, body, kind, text):
        transport = RecordingTransport(status=status, body=body)
        client = CompletionClient(make_groq_provider(transport))

        with pytest.raises(CompletionError) as exc_info:
            await client.complete([ChatMessage.user("Hi")])

        assert exc_info.value.kind is kind
        assert exc_info.value.user_message == text

    async def test_failures_are_not_retried(self):
        transport = RecordingTransport(status=500, body={"error": {"message": "boom"}})
        client = CompletionClient(make_groq_provider(transport))

        with pytest.raises(CompletionError):
            await client.complete([ChatMessage.user("Hi")])

        assert len(transport.requests) == 1

    async def test_connection_failure_is_network_error(self):
        transport = RecordingTransport(error=httpx.ConnectError("refused"))
        client = CompletionClient(make_groq_provider(transport))

        with pytest.raises(CompletionError) as exc_info:
            await client.complete([ChatMessage.user("Hi")])

        assert exc_info.value.kind is ErrorKind.NETWORK_ERROR
        assert exc_info.value.user_message == NETWORK_ERROR_MESSAGE
        assert len(transport.requests) == 1

    async def test_null_content_is_unknown_error(self):
        transport = RecordingTransport(body=completion_body(None))
        client = CompletionClient(make_groq_provider(transport))

        with pytest.raises(CompletionError) as exc_info:
            await client.complete([ChatMessage.user("Hi")])

        assert exc_info.value.kind is ErrorKind.UNKNOWN_ERROR

    async def test_api_key_not_logged(self, caplog):
        transport = RecordingTransport(status=401, body={"error": {"message": "nope"}})
        client = CompletionClient(make_groq_provider(transport))

        with caplog.at_level("DEBUG", logger="groqchat"):
            with pytest.raises(CompletionError):
                await client.complete([ChatMessage.user("Hi")])

        assert "test-key" not in caplog.text


class TestProviderFactory:
    """Tests for create_llm_provider."""

    def test_groq(self):
        provider = create_llm_provider("groq", api_key="k")
        assert isinstance(provider, GroqProvider)
        assert provider.model == "llama-3.1-8b-instant"

    def test_openai(self):
        provider = create_llm_provider("OpenAI", api_key="k", model="gpt-4o-mini")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o-mini"

    def test_missing_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("groq")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("anthropic", api_key="k")


@pytest.mark.integration
class TestGroqLive:
    """Live request against the Groq API (needs GROQ_API_KEY)."""

    async def test_round_trip(self, api_keys):
        if not api_keys["groq"]:
            pytest.skip("GROQ_API_KEY not set")
        provider = GroqProvider(api_key=api_keys["groq"])
        try:
            reply = await CompletionClient(provider).complete([ChatMessage.user("Say hi")])
        finally:
            await provider.close()
        assert reply.content
