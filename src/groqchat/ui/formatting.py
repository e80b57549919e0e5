"""Text formatting utilities for the TUI.

Hides the details of how saved conversations and log records are
presented as text.
"""

from datetime import datetime

from rich.text import Text

from ..memory import HistoryEntry
from .config import HISTORY_DATE_FORMAT, LOG_MAX_MESSAGE_LENGTH


def format_entry_date(timestamp: datetime) -> str:
    """Local calendar date of a save time."""
    return timestamp.astimezone().strftime(HISTORY_DATE_FORMAT)


def format_history_label(entry: HistoryEntry) -> Text:
    """Two-line label for a history entry: title, then dimmed date."""
    label = Text(entry.title, style="bold", overflow="ellipsis", no_wrap=True)
    label.append("\n")
    label.append(format_entry_date(entry.timestamp), style="dim")
    return label


def truncate_log_message(message: str, limit: int = LOG_MAX_MESSAGE_LENGTH) -> str:
    """Shorten a log message for the log panel."""
    if len(message) <= limit:
        return message
    return message[:limit] + "... (truncated)"
