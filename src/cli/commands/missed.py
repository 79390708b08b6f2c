"""List answers the Oracle failed to guess."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from src.cli.output import format_error, format_table, json_output
from src.state import DatabaseManager, MissedAnswer, MissedAnswerRepository

console = Console()


async def _load(db_path: Path, limit: int) -> tuple[list[MissedAnswer], int]:
    db = DatabaseManager(db_path)
    await db.initialize()
    async with db.connection() as conn:
        repo = MissedAnswerRepository(conn)
        return await repo.recent(limit), await repo.count()


def missed_command(db_path: Path, limit: int, json_flag: bool) -> None:
    """Show the most recent missed answers, oldest first."""
    if limit < 1:
        format_error(console, "Limit must be at least 1")
        raise typer.Exit(code=2)
    if not db_path.exists():
        format_error(console, f"Database not found: {db_path}",
                     hint="Start the server once, or pass --db")
        raise typer.Exit(code=1)

    try:
        entries, total = asyncio.run(_load(db_path, limit))
    except Exception as e:
        format_error(console, f"Failed to read missed answers: {e}")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, {"total": total, "count": len(entries), "missed_answers": entries})
        return
    if not entries:
        console.print("[yellow]No missed answers recorded[/yellow]")
        return
    rows = [
        (e.recorded_at.isoformat()[:19], e.answer, (e.session_id or "-")[:12])
        for e in entries
    ]
    format_table(console, f"Missed answers ({len(entries)} of {total})", ["Recorded", "Answer", "Session"], rows)
