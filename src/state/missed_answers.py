"""Missed answer persistence service.

Written to by the gateway when a player reports that the Oracle did not
guess their answer, and read by the Oracle as hints for later games.
Both directions are best-effort: failures are logged and never reach
the game.
"""
import logging
from typing import Optional

from src.state.database import DatabaseManager
from src.state.models.missed_answer import MissedAnswer
from src.state.repositories.missed_answers import MissedAnswerRepository

logger = logging.getLogger(__name__)


async def record_missed_answer(
    db_manager: DatabaseManager,
    answer: str,
    session_id: Optional[str] = None,
) -> bool:
    """Persist a missed answer.

    Args:
        db_manager: Database connection manager.
        answer: What the player was thinking of.
        session_id: The session the answer came from.

    Returns:
        True if the answer was stored.
    """
    try:
        entry = MissedAnswer(answer=answer.strip(), session_id=session_id)
        async with db_manager.connection() as conn:
            await MissedAnswerRepository(conn).add(entry)
    except Exception as exc:
        logger.warning("Failed to persist missed answer for session %s: %s", session_id, exc)
        return False
    logger.info("Recorded missed answer for session %s", session_id)
    return True


async def recent_missed_answers(
    db_manager: DatabaseManager,
    limit: int = 50,
) -> list[str]:
    """Return up to ``limit`` recent missed answers, oldest first.

    Returns an empty list when the database cannot be read.
    """
    try:
        async with db_manager.connection() as conn:
            entries = await MissedAnswerRepository(conn).recent(limit)
    except Exception as exc:
        logger.warning("Failed to load missed answers: %s", exc)
        return []
    return [entry.answer for entry in entries]
