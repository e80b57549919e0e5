"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, theme variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - single column
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Welcome Panel - shown while the buffer is empty
   ============================================ */
#welcome {
    height: 1fr;
    align: center middle;
}

#banner {
    width: auto;
    height: 3;
    content-align: center middle;
    text-style: bold;
    color: $foreground;
    padding: 1 0;
}

#welcome-prompt {
    width: auto;
    height: auto;
    text-align: center;
    color: $text-muted;
    margin-top: 1;
}

/* ============================================
   Conversation Panel
   ============================================ */
#conversation {
    height: 1fr;
    background: $background;
    padding: 0 2;
    scrollbar-gutter: stable;
}

.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
}

/* User messages - primary accent, indented from the left */
.user-message {
    margin-left: 8;
    border-left: tall $primary;
    background: $primary 12%;

    & .message-header {
        color: $primary;
        text-style: bold;
    }
}

/* Assistant messages - surface bubble */
.assistant-message {
    margin-right: 8;
    border-left: tall $secondary;
    background: $surface;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    margin: 0;
    padding: 0;
    background: transparent;
}

/* ============================================
   Loading Indicator - visible while a reply is pending
   ============================================ */
#thinking {
    height: 1;
    display: none;
    color: $secondary;
    background: $background;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    display: none;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    margin: 1 4;
    border: round $border;
    background: $surface;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:focus {
        background: transparent;
    }
}

#send-btn {
    width: 10;
    height: 100%;
    min-width: 8;
    margin: 0 0 0 1;
    background: $primary;
    color: $background;
    text-style: bold;

    &:disabled {
        opacity: 50%;
    }
}
"""
