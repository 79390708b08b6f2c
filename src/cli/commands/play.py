"""Play a game in the terminal against a running server."""

import asyncio
from typing import Any

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

from src.cli.output import format_error, format_guess, format_question, format_success
from src.cli.utils import validate_actual_answer, validate_server_url
from src.client import GameClient, GameClientError

console = Console()

_ANSWERS = ["yes", "no", "maybe", "unknown"]


def _make_client(url: str) -> GameClient:
    return GameClient(url)


def _ask_actual_answer() -> str | None:
    while True:
        raw = Prompt.ask("What were you thinking of?", default="", console=console)
        try:
            return validate_actual_answer(raw)
        except ValueError as e:
            format_error(console, str(e))


async def _play(url: str) -> dict[str, Any]:
    """Run one game to completion. Returns a summary of how it ended."""
    async with _make_client(url) as client:
        turn = await client.start()
        session_id = turn["session_id"]
        console.print(f"[dim]Connected to {client.base_url}[/dim]")
        console.print("Think of something and I will try to guess it.\n")

        while turn["kind"] == "question":
            budget = turn["questions_asked"] + turn["questions_remaining"]
            format_question(console, turn["questions_asked"] + 1, budget, turn["question"])
            answer = Prompt.ask("Your answer", choices=_ANSWERS, console=console)
            turn = await client.answer(session_id, answer)

        guess = turn.get("guess")
        if guess:
            format_guess(console, guess)
            if Confirm.ask("Did I get it right?", console=console):
                await client.end(session_id, "ai_won")
                return {"session_id": session_id, "outcome": "ai_won", "guess": guess}
        else:
            console.print("[yellow]I'm out of questions.[/yellow]")

        actual = _ask_actual_answer()
        await client.end(session_id, "user_won", actual)
        return {"session_id": session_id, "outcome": "user_won", "guess": guess, "actual_answer": actual}


def play_command(url: str) -> None:
    """Play one interactive game against the server at ``url``."""
    try:
        base_url = validate_server_url(url)
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    try:
        result = asyncio.run(_play(base_url))
    except GameClientError as e:
        hint = "Is the server running?" if e.status_code is None else None
        format_error(console, e.message, hint=hint)
        raise typer.Exit(code=3)

    if result["outcome"] == "ai_won":
        format_success(console, "I read your mind!")
    elif result.get("actual_answer"):
        format_success(console, f"You win! I'll remember '{result['actual_answer']}'.")
    else:
        format_success(console, "You win!")
