"""Core configuration constants.

Centralizes magic numbers and storage key names for the conversation core.
"""

# History configuration
HISTORY_CAPACITY = 10  # Maximum saved conversations
TITLE_LENGTH = 30  # Characters of the first message used as title
TITLE_ELLIPSIS = "..."
DEFAULT_TITLE = "New Chat"

# Durable storage keys
MESSAGES_KEY = "chatMessages"
HISTORY_KEY = "chatHistory"
THEME_KEY = "isDarkMode"

# Completion parameters
DEFAULT_MODEL = "llama-3.1-8b-instant"
MAX_TOKENS = 1000
TEMPERATURE = 0.7

# Endpoints
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
