"""Modal screens for the TUI.

This module hides the design decisions about:
- How saved conversations are listed and picked
- Keyboard shortcuts for the history dialog

The screen only returns the chosen entry id; loading it is the app's job.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from ..memory import HistoryEntry
from .config import HISTORY_EMPTY_TEXT
from .formatting import format_history_label


class HistoryScreen(ModalScreen[int | None]):
    """Modal list of saved conversations, most recent first.

    Dismisses with the selected entry id, or None when closed.
    """

    CSS = """
    HistoryScreen {
        align: right top;
        background: $background 60%;
    }

    #history-dialog {
        width: 44;
        height: auto;
        max-height: 24;
        margin: 2 2 0 0;
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }

    #history-title {
        width: 100%;
        text-style: bold;
        padding: 0 0 1 0;
    }

    #history-empty {
        color: $text-muted;
        padding: 0 0 1 0;
    }

    #history-list {
        height: auto;
        max-height: 20;
        border: none;
        background: transparent;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
        Binding("ctrl+o", "close", "Close", show=False),
    ]

    def __init__(self, entries: list[HistoryEntry]) -> None:
        super().__init__()
        self._entries = entries

    def compose(self) -> ComposeResult:
        with Vertical(id="history-dialog"):
            yield Static("Chat History", id="history-title")
            if not self._entries:
                yield Static(HISTORY_EMPTY_TEXT, id="history-empty")
            else:
                yield OptionList(
                    *[
                        Option(format_history_label(entry), id=str(entry.id))
                        for entry in self._entries
                    ],
                    id="history-list",
                )

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        option_id = event.option.id
        self.dismiss(int(option_id) if option_id is not None else None)

    def action_close(self) -> None:
        self.dismiss(None)
