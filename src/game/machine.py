"""Turn logic shared by every transport."""
import logging
from datetime import datetime, timezone
from typing import Sequence

from src.game.errors import NoPendingQuestionError
from src.game.models import (
    QA,
    Answer,
    Concluded,
    Guess,
    Question,
    Session,
    SessionState,
    TurnResult,
)
from src.oracle.base import Oracle, OracleUnavailableError

logger = logging.getLogger(__name__)

FALLBACK_QUESTIONS = (
    "Is it a living thing?",
    "Is it man-made?",
    "Is it larger than a breadbox?",
    "Is it commonly found indoors?",
    "Can it fit in a backpack?",
    "Is it bigger than a microwave?",
    "Is it something people use every day?",
    "Is it found in nature?",
)


def fallback_question(history: Sequence[QA]) -> str:
    """Pick a generic question, preferring ones not asked yet."""
    asked = {qa.question for qa in history}
    for question in FALLBACK_QUESTIONS:
        if question not in asked:
            return question
    for qa in reversed(history):
        if qa.question in FALLBACK_QUESTIONS:
            index = FALLBACK_QUESTIONS.index(qa.question)
            return FALLBACK_QUESTIONS[(index + 1) % len(FALLBACK_QUESTIONS)]
    return FALLBACK_QUESTIONS[0]


class GameStateMachine:
    """Applies start/answer/end events to a session.

    States: ``AWAITING_TURN`` -> ``TURN_PENDING`` -> ``CONCLUDED``.
    A turn is one ``advance`` followed by at most one ``submit_answer``.
    ``advance`` on an open turn replays the step already produced, so
    duplicate starts, polls and reconnects never reach the Oracle twice.
    """

    def __init__(self, oracle: Oracle) -> None:
        self._oracle = oracle

    async def advance(self, session: Session) -> TurnResult:
        if session.done:
            return Concluded(guess=session.current_guess)
        if session.turn is not None:
            return session.turn

        try:
            step = await self._oracle.next_step(
                tuple(session.history), session.questions_remaining,
            )
        except OracleUnavailableError as exc:
            logger.warning("Oracle unavailable for session %s: %s", session.id, exc)
            step = Question(fallback_question(session.history))
        if isinstance(step, Question) and not step.text.strip():
            logger.warning("Oracle returned a blank question for session %s", session.id)
            step = Question(fallback_question(session.history))

        # The session may have been concluded while the Oracle was working.
        if session.done:
            return Concluded(guess=session.current_guess)
        if isinstance(step, Guess):
            session.current_guess = step.text
        else:
            session.pending_question = step.text
        session.turn = step
        logger.info(
            "Session %s turn %d: %s", session.id, session.questions_asked + 1, step.kind,
        )
        return step

    def submit_answer(self, session: Session, answer: Answer) -> SessionState:
        """Record the answer to the pending question.

        Returns:
            The session state after the answer is applied.

        Raises:
            NoPendingQuestionError: If no question is outstanding.
        """
        if session.done:
            return session.state
        if session.pending_question is None:
            raise NoPendingQuestionError(session.id)
        session.history.append(QA(question=session.pending_question, answer=Answer(answer)))
        session.pending_question = None
        session.turn = None
        if len(session.history) >= session.budget:
            self.conclude(session)
        return session.state

    def conclude(self, session: Session) -> bool:
        """Mark the session finished. Returns False if it already was."""
        if session.done and session.ended_at is not None:
            return False
        session.done = True
        session.ended_at = datetime.now(timezone.utc)
        logger.info(
            "Session %s concluded after %d questions", session.id, session.questions_asked,
        )
        return True
