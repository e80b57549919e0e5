from .base import LLMProvider
from .completion import CompletionClient, classify_error
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse, Role
from .providers import GroqProvider, OpenAIProvider

__all__ = [
    "ChatMessage",
    "CompletionClient",
    "GroqProvider",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "Role",
    "classify_error",
    "create_llm_provider",
]
