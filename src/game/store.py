"""In-memory session store."""
import asyncio
import logging
import uuid
from typing import Optional

from src.game.models import QUESTION_BUDGET, Session

logger = logging.getLogger(__name__)


class SessionStore:
    """Maps session ids to sessions, with one lock per session.

    Sessions are kept for the lifetime of the process, including
    concluded ones, so later read-only queries still resolve. Callers
    that mutate a session hold its lock for the whole operation, which
    serializes work per session id while leaving other sessions free.
    """

    def __init__(self, question_budget: int = QUESTION_BUDGET) -> None:
        if question_budget < 1:
            raise ValueError("question_budget must be at least 1")
        self._budget = question_budget
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def question_budget(self) -> int:
        return self._budget

    def create(self) -> Session:
        """Create a session with a fresh, never reused id."""
        session_id = str(uuid.uuid4())
        while session_id in self._sessions:
            session_id = str(uuid.uuid4())
        session = Session(id=session_id, budget=self._budget)
        self._sessions[session_id] = session
        self._locks[session_id] = asyncio.Lock()
        logger.info("Created session %s", session_id)
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """Return the session, or None when the id is unknown."""
        return self._sessions.get(session_id)

    def lock(self, session_id: str) -> asyncio.Lock:
        """Return the lock guarding a session.

        Raises:
            KeyError: If the session id is unknown.
        """
        return self._locks[session_id]

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
