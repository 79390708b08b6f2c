"""Run the game server."""

import typer
import uvicorn
from rich.console import Console

from src.cli.output import format_error
from src.server.config import load_config_from_env

console = Console()


def serve_command(host: str | None, port: int | None) -> None:
    """Run the server under uvicorn, with env config as the default bind address."""
    try:
        config = load_config_from_env()
    except ValueError as e:
        format_error(console, str(e), hint="Check the server environment variables")
        raise typer.Exit(code=2)

    bind_host = host or config.host
    bind_port = port if port is not None else config.port
    console.print(f"[green]Serving on http://{bind_host}:{bind_port}[/green]")
    uvicorn.run("src.server.app:create_app", factory=True, host=bind_host, port=bind_port)
