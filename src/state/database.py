"""SQLite storage for missed answers."""
import aiosqlite
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

SCHEMA_VERSION = "1.0.0"


class DatabaseManager:
    """Owns the database file: creates the schema and hands out connections.

    A connection is opened per unit of work; SQLite serializes writers, and
    missed answers are written at most once per finished game.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._initialized = False

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Create the database file and schema. Safe to call repeatedly."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self.connection() as conn:
            await conn.executescript(_SCHEMA)
            await conn.execute(
                "INSERT OR IGNORE INTO schema_versions (version, applied_at) VALUES (?, datetime('now'))",
                (SCHEMA_VERSION,),
            )
            await conn.commit()
        self._initialized = True

    async def schema_version(self) -> Optional[str]:
        """Return the newest applied schema version, or None before initialize."""
        async with self.connection() as conn:
            try:
                cursor = await conn.execute(
                    "SELECT version FROM schema_versions ORDER BY applied_at DESC, version DESC LIMIT 1"
                )
            except aiosqlite.OperationalError:
                return None
            row = await cursor.fetchone()
        return row["version"] if row else None

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await aiosqlite.connect(self._db_path)
        conn.row_factory = aiosqlite.Row
        try:
            yield conn
        finally:
            await conn.close()

    async def close(self) -> None:
        self._initialized = False


_SCHEMA = """
CREATE TABLE IF NOT EXISTS schema_versions (version TEXT PRIMARY KEY, applied_at TEXT NOT NULL);
CREATE TABLE IF NOT EXISTS missed_answers (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    answer      TEXT NOT NULL CHECK(length(answer) > 0),
    session_id  TEXT,
    recorded_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_missed_recorded ON missed_answers(recorded_at);
"""
