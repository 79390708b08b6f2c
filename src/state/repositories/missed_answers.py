"""Missed answer repository."""
import aiosqlite
from datetime import datetime

from src.state.models.missed_answer import MissedAnswer


class MissedAnswerRepository:
    """Append-only log of answers the Oracle failed to guess."""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def add(self, entry: MissedAnswer) -> None:
        await self._conn.execute(
            "INSERT INTO missed_answers (answer, session_id, recorded_at) "
            "VALUES (?, ?, ?)",
            (entry.answer, entry.session_id, entry.recorded_at.isoformat()),
        )
        await self._conn.commit()

    async def recent(self, limit: int = 50) -> list[MissedAnswer]:
        """Return the newest ``limit`` entries, oldest first.

        Args:
            limit: Maximum number of entries to return.
        """
        cursor = await self._conn.execute(
            "SELECT * FROM missed_answers ORDER BY id DESC LIMIT ?",
            (limit,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_entry(row) for row in reversed(rows)]

    async def count(self) -> int:
        cursor = await self._conn.execute("SELECT COUNT(*) FROM missed_answers")
        row = await cursor.fetchone()
        return row[0] if row else 0

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> MissedAnswer:
        return MissedAnswer(
            answer=row["answer"],
            session_id=row["session_id"],
            recorded_at=datetime.fromisoformat(row["recorded_at"]),
        )
