"""Main CLI application using Typer."""
import asyncio
import shlex
import sys

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from ..errors import HistoryEntryNotFoundError, StorageError
from ..logging_config import configure_logging
from ..memory import ConversationStore, HistoryEntry, HistoryManager
from ..ui.formatting import format_entry_date
from .providers import create_session, get_storage

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="groqchat",
    help="Chat with a remote LLM, with saved conversation history",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _history_table(entries: list[HistoryEntry]) -> Table:
    table = Table(title="Chat History")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Messages", justify="right")
    table.add_column("Saved", style="dim")
    for index, entry in enumerate(entries, 1):
        table.add_row(
            str(index),
            entry.title,
            str(len(entry.messages)),
            format_entry_date(entry.timestamp),
        )
    return table


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug, info, warning, or error"
    ),
):
    """Launch the interactive chat interface in the terminal."""
    from ..ui import run_tui

    session = create_session(console)
    try:
        asyncio.run(run_tui(session, log_level=log_level))
    except KeyboardInterrupt:
        pass


@app.command()
def serve(
    host: str = typer.Option("localhost", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    debug: bool = typer.Option(False, "--debug", help="Enable textual-serve debug mode"),
):
    """Serve the chat interface to a web browser."""
    from textual_serve.server import Server

    command = f"{shlex.quote(sys.executable)} -m groqchat tui"
    console.print(f"[dim]Serving on http://{host}:{port}[/dim]")
    server = Server(command, host=host, port=port, title="AI Chatbot")
    server.serve(debug=debug)


@app.command()
def chat(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Console log level: debug, info, warning, or error"
    ),
):
    """Interactive chat in the console."""
    configure_logging(log_level)

    async def _chat():
        session = create_session(console)
        try:
            await session.start()

            console.print("[bold cyan]AI Chatbot[/bold cyan]")
            console.print(
                "[dim]Commands: /new, /history, /load <n>. "
                "Type 'exit', 'quit', or 'q' to leave[/dim]\n"
            )
            if session.messages:
                console.print(f"[dim]Resumed conversation ({len(session.messages)} messages)[/dim]\n")

            while True:
                try:
                    line = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                user_input = line.strip()
                if not user_input:
                    continue

                if user_input.lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                if user_input == "/new":
                    await session.new_chat()
                    console.print("[dim]Started a new chat[/dim]\n")
                    continue

                if user_input == "/history":
                    entries = session.history
                    if entries:
                        console.print(_history_table(entries))
                    else:
                        console.print("[dim]No chat history yet[/dim]")
                    continue

                if user_input.startswith("/load"):
                    await _load(session, user_input)
                    continue

                with console.status("[dim]Thinking...[/dim]"):
                    reply = await session.send_message(line)
                if reply is not None:
                    console.print("[bold green]Assistant:[/bold green]")
                    console.print(Markdown(reply.content))
                    console.print()

        except StorageError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await session.close()

    async def _load(session, command: str) -> None:
        _, _, arg = command.partition(" ")
        entries = session.history
        try:
            index = int(arg) - 1
            if index < 0:
                raise IndexError(index)
            entry = entries[index]
            await session.load_conversation(entry.id)
        except (ValueError, IndexError, HistoryEntryNotFoundError):
            console.print("[yellow]Usage: /load <n> with n from /history[/yellow]")
            return
        console.print(f"[dim]Loaded: {entry.title}[/dim]\n")
        for message in session.messages:
            speaker = "You" if message.role == "user" else "Assistant"
            console.print(f"[bold]{speaker}:[/bold]")
            console.print(Markdown(message.content))

    asyncio.run(_chat())


@app.command()
def history():
    """List saved conversations."""
    async def _history():
        storage = get_storage()
        try:
            await storage.connect()
            manager = HistoryManager(storage)
            await manager.restore()
            entries = manager.list_all()
        except StorageError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await storage.disconnect()

        if not entries:
            console.print("[dim]No chat history yet[/dim]")
            return
        console.print(_history_table(entries))

    asyncio.run(_history())


@app.command()
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation"
    ),
):
    """Delete all saved conversations and the current chat."""
    if not yes and not typer.confirm("Delete all saved conversations?"):
        console.print("[dim]Aborted.[/dim]")
        return

    async def _clear():
        storage = get_storage()
        try:
            await storage.connect()
            store = ConversationStore(storage)
            manager = HistoryManager(storage)
            # Restore first so the theme preference survives the reset
            await store.restore()
            await manager.clear()
            await store.reset()
        except StorageError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await storage.disconnect()

        console.print("[green]Chat history cleared.[/green]")

    asyncio.run(_clear())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
