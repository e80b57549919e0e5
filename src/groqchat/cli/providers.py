"""Provider factory functions for CLI.

Centralizes creation of storage, LLM and session instances from environment
variables. Hides configuration details from command implementations.
"""

import os
from pathlib import Path

import typer
from rich.console import Console

from ..chat import ChatSession
from ..config import DEFAULT_MODEL
from ..llm import CompletionClient, LLMProvider, create_llm_provider
from ..storage import KeyValueStore, create_storage_backend

DEFAULT_DB_PATH = Path.home() / ".groqchat" / "chat.db"

# Default console for output
_console = Console()


def get_storage() -> KeyValueStore:
    """Create storage backend from environment variables.

    Returns:
        Key-value storage backend instance

    Environment variables:
        GROQCHAT_STORAGE: Backend type (sqlite or memory; default: sqlite)
        GROQCHAT_DB_PATH: SQLite file (default: ~/.groqchat/chat.db)
    """
    backend = os.getenv("GROQCHAT_STORAGE", "sqlite").lower()
    if backend == "sqlite":
        return create_storage_backend(
            "sqlite",
            path=os.getenv("GROQCHAT_DB_PATH", str(DEFAULT_DB_PATH)),
        )
    return create_storage_backend(backend)


def _timeout_from_env() -> dict[str, float]:
    raw = os.getenv("LLM_TIMEOUT")
    if not raw:
        return {}
    try:
        return {"timeout": float(raw)}
    except ValueError:
        _console.print(f"[yellow]Warning: ignoring invalid LLM_TIMEOUT={raw!r}[/yellow]")
        return {}


def get_llm(console: Console | None = None) -> LLMProvider | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (groq, openai; default: groq)
        GROQ_API_KEY: Groq API key (for groq provider)
        GROQ_MODEL: Groq model (default: llama-3.1-8b-instant)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
        LLM_TIMEOUT: Transport timeout in seconds (default: SDK default)
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "groq").lower()
    client_kwargs = _timeout_from_env()

    if llm_provider == "groq":
        api_key = os.getenv("GROQ_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: GROQ_API_KEY not set[/yellow]")
            return None
        model = os.getenv("GROQ_MODEL", DEFAULT_MODEL)
        return create_llm_provider("groq", api_key=api_key, model=model, **client_kwargs)

    elif llm_provider == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: OPENAI_API_KEY not set[/yellow]")
            return None
        model = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
        return create_llm_provider("openai", api_key=api_key, model=model, **client_kwargs)

    else:
        con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
        return None


def require_llm(console: Console | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        typer.Exit: If LLM provider is not configured
    """
    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def create_session(console: Console | None = None) -> ChatSession:
    """Build a ChatSession from the environment.

    Raises:
        typer.Exit: If LLM provider is not configured
    """
    llm = require_llm(console)
    return ChatSession(storage=get_storage(), client=CompletionClient(llm))
