"""Logging integration for the TUI.

Hides the details of how the TUI receives application log records.
Uses call_from_thread when a record is emitted outside the app thread.
"""

import logging
import threading
from typing import TYPE_CHECKING

from .formatting import truncate_log_message

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import DebugPanel


class PanelLogHandler(logging.Handler):
    """Logging handler that writes records to the DebugPanel."""

    def __init__(self, panel: "DebugPanel", app: "App", level: int = logging.INFO) -> None:
        super().__init__(level)
        self.panel = panel
        self.app = app

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = truncate_log_message(record.getMessage())
            component = record.name.rsplit(".", 1)[-1]
            if self.app._thread_id != threading.get_ident():
                self.app.call_from_thread(self.panel.add_record, record.levelno, component, message)
            else:
                self.panel.add_record(record.levelno, component, message)
        except Exception:
            self.handleError(record)
