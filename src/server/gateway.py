"""Single entry point shared by every protocol adapter."""
import logging
from typing import Optional

from src.game.errors import SessionNotFoundError
from src.game.machine import GameStateMachine
from src.game.models import Answer, Concluded, Outcome, Session, SessionState, TurnOutcome
from src.game.store import SessionStore
from src.oracle.base import Oracle
from src.state.database import DatabaseManager
from src.state.missed_answers import record_missed_answer

logger = logging.getLogger(__name__)


class GameGateway:
    """Runs game operations against one store and one state machine.

    Every operation holds the session's lock, so events for the same
    session id are applied one at a time in arrival order while Oracle
    calls for different sessions run concurrently.
    """

    def __init__(
        self,
        store: SessionStore,
        oracle: Oracle,
        db_manager: Optional[DatabaseManager] = None,
    ) -> None:
        self._store = store
        self._machine = GameStateMachine(oracle)
        self._db = db_manager

    @property
    def store(self) -> SessionStore:
        return self._store

    def _require(self, session_id: str) -> Session:
        session = self._store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def start(self) -> TurnOutcome:
        """Create a session and produce its first question or guess."""
        session = self._store.create()
        async with self._store.lock(session.id):
            result = await self._machine.advance(session)
            return TurnOutcome.of(session, result)

    async def answer(self, session_id: str, answer: Answer) -> TurnOutcome:
        """Apply an answer and produce the next step.

        Raises:
            SessionNotFoundError: If the session id is unknown.
            NoPendingQuestionError: If no question is outstanding.
        """
        session = self._require(session_id)
        async with self._store.lock(session_id):
            state = self._machine.submit_answer(session, answer)
            if state == SessionState.CONCLUDED:
                return TurnOutcome.of(session, Concluded(guess=session.current_guess))
            result = await self._machine.advance(session)
            return TurnOutcome.of(session, result)

    async def snapshot(self, session_id: str) -> TurnOutcome:
        """Return the open turn, producing it first if none is open."""
        session = self._require(session_id)
        async with self._store.lock(session_id):
            result = await self._machine.advance(session)
            return TurnOutcome.of(session, result)

    async def get_guess(self, session_id: str) -> Optional[str]:
        session = self._require(session_id)
        async with self._store.lock(session_id):
            return session.current_guess

    async def end(
        self,
        session_id: str,
        outcome: Outcome,
        actual_answer: Optional[str] = None,
    ) -> None:
        """Conclude a session and remember answers the Oracle missed.

        Raises:
            SessionNotFoundError: If the session id is unknown.
        """
        session = self._require(session_id)
        async with self._store.lock(session_id):
            concluded = self._machine.conclude(session)
        if not concluded:
            logger.info("Session %s was already ended", session_id)
            return
        if Outcome(outcome) == Outcome.USER_WON and actual_answer and actual_answer.strip():
            if self._db is not None:
                await record_missed_answer(self._db, actual_answer, session_id)
