"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering (markdown for replies, plain text for user input)
- Input history and busy state of the input bar
- Log rendering and level display
- Welcome banner animation scheduling
"""

import logging
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.timer import Timer
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..llm.models import ChatMessage, Role
from .animation import TypewriterSequence
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_TIMESTAMP_FORMAT,
    NOTIFY_SHORT,
    TYPEWRITER_CURSOR,
    TYPEWRITER_TYPE_DELAY,
    WELCOME_PROMPT,
)


class ClickableMessage(Vertical):
    """A chat message container that copies its raw content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=NOTIFY_SHORT)


class ConversationView(VerticalScroll):
    """Scrollable view of the active conversation."""

    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[ChatMessage] = []

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def show_messages(self, messages: list[ChatMessage]) -> None:
        """Replace the displayed conversation."""
        self._messages = list(messages)
        self.remove_children()
        for msg in self._messages:
            self._render_message(msg)
        self.scroll_end(animate=False)

    def add_message(self, msg: ChatMessage) -> None:
        """Append one message to the display."""
        self._messages.append(msg)
        self._render_message(msg)
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._messages):
            if msg.role == Role.ASSISTANT:
                return msg.content
        return None

    def _render_message(self, msg: ChatMessage) -> None:
        if msg.role == Role.USER:
            container = ClickableMessage(content=msg.content, classes="chat-message user-message")
            container.compose_add_child(Static("You", classes="message-header"))
            container.compose_add_child(Static(Text(msg.content), classes="message-content"))
        else:
            container = ClickableMessage(content=msg.content, classes="chat-message assistant-message")
            container.compose_add_child(Static("Assistant", classes="message-header"))
            container.compose_add_child(Markdown(msg.content, classes="message-content"))
        self.mount(container)


class TypewriterBanner(Static):
    """Animated "hello" banner driven by a TypewriterSequence.

    Each frame schedules the next one with its own delay; stop() cancels
    the pending timer and start() replays from an empty banner.
    """

    def __init__(self, *args, sequence: TypewriterSequence | None = None, **kwargs) -> None:
        super().__init__("", *args, **kwargs)
        self._sequence = sequence or TypewriterSequence()
        self._timer: Timer | None = None

    @property
    def running(self) -> bool:
        return self._timer is not None

    def on_mount(self) -> None:
        self.start()

    def on_unmount(self) -> None:
        self.stop()

    def start(self) -> None:
        """(Re)start the animation from the beginning."""
        self.stop()
        self._sequence.reset()
        self._show("")
        self._schedule(TYPEWRITER_TYPE_DELAY)

    def stop(self) -> None:
        """Cancel the pending frame, if any."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _schedule(self, delay: float) -> None:
        self._timer = self.set_timer(delay, self._advance)

    def _advance(self) -> None:
        frame = self._sequence.next_frame()
        self._show(frame.text)
        self._schedule(frame.delay)

    def _show(self, text: str) -> None:
        self.update(Text(f"{text}{TYPEWRITER_CURSOR}"))


class WelcomePanel(Vertical):
    """Greeting shown while the conversation is empty."""

    def compose(self):
        yield TypewriterBanner(id="banner")
        yield Static(WELCOME_PROMPT, id="welcome-prompt")

    def show(self) -> None:
        self.display = True
        self.query_one(TypewriterBanner).start()

    def hide(self) -> None:
        self.display = False
        self.query_one(TypewriterBanner).stop()


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="primary").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        self.border_title = INPUT_PLACEHOLDER
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self.submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    @property
    def busy(self) -> bool:
        return self.query_one("#chat-input", TextArea).disabled

    def set_busy(self, busy: bool) -> None:
        """Disable input and Send while a reply is pending."""
        self.query_one("#chat-input", TextArea).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy
        if not busy:
            self.focus_input()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        elif self._history_index == -1:
            # Not browsing: keep the draft
            return
        elif self._history_index < len(self._history) - 1:
            self._history_index += 1
        else:
            self._history_index = -1
            text_area.text = ""
            return
        text_area.text = self._history[self._history_index]

    def submit(self) -> None:
        """Post the current text, if any, and clear the input."""
        if self.busy:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text
        if not value.strip():
            return
        if not self._history or self._history[-1] != value:
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        text_area.text = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel showing application log records.

    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"

    LEVEL_COLORS = {
        logging.DEBUG: "dim white",
        logging.INFO: "cyan",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "bold red",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(
            *args,
            markup=False,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._level_name = "INFO"

    def set_level_name(self, level_name: str) -> None:
        self._level_name = level_name
        if self.display:
            self.border_subtitle = f"Level: {level_name}"

    def add_record(self, level: int, component: str, message: str) -> None:
        """Write one log line: time, level, component, message."""
        line = Text()
        line.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT), style="dim")
        line.append(" ")
        line.append(f"{logging.getLevelName(level):<7}", style=self.LEVEL_COLORS.get(level, "white"))
        line.append(f"[{component}] ", style="magenta")
        line.append(message)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self.border_subtitle = f"Level: {self._level_name}"

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
