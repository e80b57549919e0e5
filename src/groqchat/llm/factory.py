from typing import Any

from .base import LLMProvider
from .providers import GroqProvider, OpenAIProvider

PROVIDERS: dict[str, type[LLMProvider]] = {
    "groq": GroqProvider,
    "openai": OpenAIProvider,
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create a chat-completion provider by name.

    Args:
        provider: 'groq' or 'openai' (case-insensitive)
        **config: Constructor arguments. api_key is required; model,
            base_url and AsyncOpenAI options (timeout, http_client) are
            optional.

    Returns:
        Provider ready to serve requests

    Raises:
        ValueError: If the provider name is unknown
        TypeError: If api_key is missing

    Examples:
        >>> provider = create_llm_provider("groq", api_key="gsk_...")
        >>> provider.model
        'llama-3.1-8b-instant'
    """
    provider_class = PROVIDERS.get(provider.lower())
    if provider_class is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(sorted(PROVIDERS))}"
        )
    if not config.get("api_key"):
        raise TypeError(f"{provider_class.__name__} requires 'api_key' in config")
    return provider_class(**config)
