"""Main Textual TUI application.

Orchestrates the UI components around a ChatSession: renders the active
conversation, runs one send worker per user turn and exposes new chat,
history, theme and log actions.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, LoadingIndicator

from ..chat import ChatSession
from ..errors import HistoryEntryNotFoundError, SessionBusyError, StorageError
from ..llm.models import ChatMessage
from ..logging_config import get_app_logger
from .callbacks import PanelLogHandler
from .config import NOTIFY_LONG, NOTIFY_SHORT
from .screens import HistoryScreen
from .styles import APP_CSS
from .themes import THEMES, theme_name
from .widgets import ChatInputBar, ConversationView, DebugPanel, WelcomePanel

logger = logging.getLogger(__name__)


class ChatbotApp(App):
    """Textual TUI for chatting with a remote LLM."""

    CSS = APP_CSS
    TITLE = "AI Chatbot"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "new_chat", "New Chat"),
        Binding("ctrl+o", "show_history", "History"),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._log_handler: PanelLogHandler | None = None
        self._logger_propagate = True

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield WelcomePanel(id="welcome")
        yield ConversationView(id="conversation")
        yield LoadingIndicator(id="thinking")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Restore the previous session and apply the saved theme."""
        for theme in THEMES:
            self.register_theme(theme)
        self._attach_log_handler()

        try:
            await self._session.start()
        except StorageError as e:
            logger.error("Storage unavailable: %s", e)
            self.notify(f"Storage unavailable: {e}", severity="error", timeout=NOTIFY_LONG)

        self.theme = theme_name(self._session.dark_mode)
        self.sub_title = self._session.client.model
        self._render_conversation()
        self.query_one(ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach the log panel handler."""
        if self._log_handler is not None:
            app_logger = get_app_logger()
            app_logger.removeHandler(self._log_handler)
            app_logger.propagate = self._logger_propagate
            self._log_handler = None

    def _attach_log_handler(self) -> None:
        panel = self.query_one(DebugPanel)
        level_name = (self._log_level or "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level_name, level = "INFO", logging.INFO

        self._log_handler = PanelLogHandler(panel, self, level)
        app_logger = get_app_logger()
        app_logger.addHandler(self._log_handler)
        app_logger.setLevel(level)
        # Console handlers would draw over the screen
        self._logger_propagate = app_logger.propagate
        app_logger.propagate = False

        panel.set_level_name(level_name)
        if self._log_level is not None:
            panel.show()

    def _render_conversation(self) -> None:
        """Sync the display with the session buffer."""
        messages = self._session.messages
        welcome = self.query_one(WelcomePanel)
        view = self.query_one(ConversationView)
        view.show_messages(messages)
        if messages:
            welcome.hide()
            view.display = True
        else:
            view.display = False
            welcome.show()

    def _set_busy(self, busy: bool) -> None:
        self.query_one(ChatInputBar).set_busy(busy)
        self.query_one("#thinking", LoadingIndicator).display = busy

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._session.busy:
            self.notify("Wait for the current reply", severity="warning", timeout=NOTIFY_SHORT)
            return

        view = self.query_one(ConversationView)
        self.query_one(WelcomePanel).hide()
        view.display = True
        view.add_message(ChatMessage.user(event.value))

        self._set_busy(True)
        self._send(event.value)

    @work(exclusive=True, group="send")
    async def _send(self, text: str) -> None:
        """Run one turn as a background async worker."""
        view = self.query_one(ConversationView)
        try:
            reply = await self._session.send_message(text)
            if reply is not None:
                view.add_message(reply)
        except SessionBusyError:
            self.notify("Wait for the current reply", severity="warning", timeout=NOTIFY_SHORT)
            self._render_conversation()
        except StorageError as e:
            logger.error("Failed to save conversation: %s", e)
            self.notify(f"Failed to save conversation: {e}", severity="error", timeout=NOTIFY_LONG)
            self._render_conversation()
        finally:
            self._set_busy(False)

    async def action_new_chat(self) -> None:
        """Start an empty conversation."""
        if self._session.busy:
            self.notify("Wait for the current reply", severity="warning", timeout=NOTIFY_SHORT)
            return
        try:
            await self._session.new_chat()
        except StorageError as e:
            self.notify(f"Failed to save conversation: {e}", severity="error", timeout=NOTIFY_LONG)
        self._render_conversation()

    def action_show_history(self) -> None:
        """Open the saved-conversations list."""
        self.push_screen(HistoryScreen(self._session.history), callback=self._on_history_closed)

    def _on_history_closed(self, entry_id: int | None) -> None:
        if entry_id is not None:
            self._load_conversation(entry_id)

    @work(group="history")
    async def _load_conversation(self, entry_id: int) -> None:
        if self._session.busy:
            self.notify("Wait for the current reply", severity="warning", timeout=NOTIFY_SHORT)
            return
        try:
            await self._session.load_conversation(entry_id)
        except HistoryEntryNotFoundError:
            self.notify("Conversation no longer saved", severity="warning", timeout=NOTIFY_SHORT)
        except StorageError as e:
            self.notify(f"Failed to save conversation: {e}", severity="error", timeout=NOTIFY_LONG)
        self._render_conversation()

    async def action_toggle_theme(self) -> None:
        """Switch between light and dark mode."""
        try:
            dark_mode = await self._session.toggle_theme()
        except StorageError as e:
            self.notify(f"Failed to save theme: {e}", severity="error", timeout=NOTIFY_LONG)
            dark_mode = self._session.dark_mode
        self.theme = theme_name(dark_mode)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        is_visible = self.query_one(DebugPanel).toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_SHORT)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self.query_one(ConversationView).get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied", timeout=NOTIFY_SHORT)
        else:
            self.notify("No response to copy", severity="warning", timeout=NOTIFY_SHORT)


async def run_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session (storage and LLM client) to drive
        log_level: Log level for the panel (debug/info/warning/error), None to hide
    """
    app = ChatbotApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await session.close()
