"""Terminal UI module for groqchat.

Provides a Textual-based TUI (also servable to a browser) for chatting.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (conversation view, input bar, log panel, banner)
- animation.py: Welcome banner typewriter timing
- styles.py: CSS styling (layout decisions)
- themes.py: Light and dark color palettes
- screens.py: Modal dialogs (saved conversations)
- callbacks.py: Logging integration (how the TUI receives log records)
- app.py: Application orchestration (user interaction flow)
"""

from .animation import Frame, TypewriterSequence
from .app import ChatbotApp, run_tui
from .screens import HistoryScreen
from .widgets import ChatInputBar, ConversationView, DebugPanel, TypewriterBanner

__all__ = [
    "ChatInputBar",
    "ChatbotApp",
    "ConversationView",
    "DebugPanel",
    "Frame",
    "HistoryScreen",
    "TypewriterBanner",
    "TypewriterSequence",
    "run_tui",
]
