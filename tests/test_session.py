"""Tests for the chat session send flow and user actions."""
import asyncio
import json

import pytest

from groqchat.chat import ChatSession
from groqchat.config import HISTORY_KEY, MESSAGES_KEY
from groqchat.errors import HistoryEntryNotFoundError, SessionBusyError
from groqchat.llm import ChatMessage, CompletionClient, Role

from conftest import FakeProvider, RecordingTransport, make_groq_provider


async def wait_until_busy(session: ChatSession) -> None:
    for _ in range(100):
        if session.busy:
            return
        await asyncio.sleep(0)
    raise AssertionError("session never became busy")


class TestSendMessage:
    """Tests for ChatSession.send_message."""

    async def test_successful_turn(self, session, fake_provider):
        reply = await session.send_message("Hi")

        assert reply == ChatMessage.assistant("Hello")
        assert session.messages == [ChatMessage.user("Hi"), ChatMessage.assistant("Hello")]
        assert fake_provider.calls == [[ChatMessage.user("Hi")]]
        assert session.busy is False

    async def test_blank_input_is_ignored(self, session, fake_provider):
        assert await session.send_message("   ") is None
        assert await session.send_message("") is None

        assert session.messages == []
        assert fake_provider.calls == []

    async def test_input_is_sent_verbatim(self, session):
        await session.send_message("  spaced out  ")
        assert session.messages[0].content == "  spaced out  "

    async def test_failed_turn_becomes_assistant_message(self, storage):
        transport = RecordingTransport(status=401, body={"error": {"message": "Invalid API Key"}})
        session = ChatSession(storage, CompletionClient(make_groq_provider(transport)))
        await session.start()

        reply = await session.send_message("Hi")

        assert reply.role is Role.ASSISTANT
        assert reply.content == "Invalid API key. Please check your Groq API key."
        assert len(session.messages) == 2
        assert session.busy is False

    async def test_busy_cleared_after_failure(self, storage):
        provider = FakeProvider(error=RuntimeError("boom"))
        session = ChatSession(storage, CompletionClient(provider))
        await session.start()

        await session.send_message("Hi")
        provider.error = None
        reply = await session.send_message("Again")

        assert reply.content == "Hello"
        assert [m.content for m in session.messages] == [
            "Hi",
            "Sorry, an error occurred.",
            "Again",
            "Hello",
        ]

    async def test_second_send_while_busy_is_rejected(self, session, fake_provider):
        fake_provider.release = asyncio.Event()
        first = asyncio.create_task(session.send_message("Hi"))
        await wait_until_busy(session)

        with pytest.raises(SessionBusyError):
            await session.send_message("Again")

        fake_provider.release.set()
        await first
        assert len(fake_provider.calls) == 1
        assert [m.content for m in session.messages] == ["Hi", "Hello"]

    async def test_user_message_persisted_before_reply(self, session, storage, fake_provider):
        fake_provider.release = asyncio.Event()
        task = asyncio.create_task(session.send_message("Hi"))
        await wait_until_busy(session)
        await asyncio.sleep(0)

        raw = json.loads(await storage.get(MESSAGES_KEY))
        assert raw == [{"role": "user", "content": "Hi"}]

        fake_provider.release.set()
        await task

    async def test_consecutive_turns_keep_one_history_entry(self, session):
        await session.send_message("Hi")
        await session.send_message("How are you?")

        assert len(session.history) == 1
        assert len(session.history[0].messages) == 4
        assert session.history[0].title == "Hi..."


class TestSessionActions:
    """Tests for new chat, load, theme and clear."""

    async def test_new_chat_keeps_history(self, session):
        await session.send_message("Hi")
        await session.new_chat()

        assert session.messages == []
        assert len(session.history) == 1

    async def test_new_conversation_after_new_chat_is_separate(self, session):
        await session.send_message("Hi")
        await session.new_chat()
        await session.send_message("Different topic")

        titles = [e.title for e in session.history]
        assert titles == ["Different topic...", "Hi..."]

    async def test_load_conversation(self, session):
        await session.send_message("First")
        await session.new_chat()
        await session.send_message("Second")
        first_id = session.history[1].id

        entry = await session.load_conversation(first_id)

        assert entry.first_content == "First"
        assert [m.content for m in session.messages] == ["First", "Hello"]
        assert len(session.history) == 2

    async def test_load_unknown_conversation(self, session):
        with pytest.raises(HistoryEntryNotFoundError):
            await session.load_conversation(12345)

    async def test_toggle_theme(self, session):
        assert session.dark_mode is False
        assert await session.toggle_theme() is True
        assert session.dark_mode is True

    async def test_clear_history(self, session, storage):
        await session.send_message("Hi")
        await session.clear_history()

        assert session.history == []
        assert session.messages == []
        assert json.loads(await storage.get(HISTORY_KEY)) == []

    async def test_state_survives_restart(self, storage):
        first = ChatSession(storage, CompletionClient(FakeProvider()))
        await first.start()
        await first.send_message("Hi")
        await first.toggle_theme()

        second = ChatSession(storage, CompletionClient(FakeProvider()))
        await second.start()

        assert second.messages == first.messages
        assert second.dark_mode is True
        assert [e.id for e in second.history] == [e.id for e in first.history]

    async def test_close_releases_provider(self, session, fake_provider):
        await session.close()
        assert fake_provider.closed is True
