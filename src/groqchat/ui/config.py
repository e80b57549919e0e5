"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

# Welcome banner typewriter animation
TYPEWRITER_TEXT = "hello"
TYPEWRITER_TYPE_DELAY = 0.2  # Seconds between typed characters
TYPEWRITER_DELETE_DELAY = 0.1  # Seconds between deleted characters
TYPEWRITER_HOLD_DELAY = 1.0  # Seconds the full word stays before deleting
TYPEWRITER_PAUSE_DELAY = 0.5  # Seconds of blank banner before retyping
TYPEWRITER_CURSOR = "|"

WELCOME_PROMPT = "How can I help you\ntoday?"
INPUT_PLACEHOLDER = "Type your message..."

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# History panel configuration
HISTORY_DATE_FORMAT = "%Y-%m-%d"
HISTORY_EMPTY_TEXT = "No chat history yet"

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Notification timeouts (seconds)
NOTIFY_SHORT = 2
NOTIFY_LONG = 5
