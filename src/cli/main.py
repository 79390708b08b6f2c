"""Main CLI entry point for the AI Mind Reader."""

import os
from pathlib import Path

import typer
from rich.console import Console

from src.cli.commands.missed import missed_command
from src.cli.commands.play import play_command
from src.cli.commands.serve import serve_command

app = typer.Typer(
    name="mindreader",
    help="AI Mind Reader - twenty questions against an AI oracle",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


@app.command("serve")
def serve(
    host: str = typer.Option(None, "-h", "--host", help="Bind address (default: $HOST)"),
    port: int = typer.Option(None, "-p", "--port", help="Port (default: $PORT or 4000)"),
) -> None:
    """Run the game server."""
    serve_command(host, port)


@app.command("play")
def play(
    url: str = typer.Option("http://localhost:4000", "-u", "--url", help="Server base URL"),
) -> None:
    """Play a game in the terminal."""
    play_command(url)


@app.command("missed")
def missed(
    db: Path = typer.Option(None, "-d", "--db", help="Database path (default: $DB_PATH)"),
    limit: int = typer.Option(50, "-l", "--limit", help="Max entries to show"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List answers the Oracle failed to guess."""
    missed_command(db or Path(os.environ.get("DB_PATH", "data/mindreader.db")), limit, json_flag)


def main() -> None:
    """Entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)
