"""Game sessions: data model, store and turn logic."""
from src.game.models import (
    QUESTION_BUDGET, QA, Answer, Concluded, Guess, Outcome, OracleStep, Question,
    Session, SessionState, TurnOutcome, TurnResult,
)
from src.game.errors import GameError, NoPendingQuestionError, SessionNotFoundError
from src.game.store import SessionStore
from src.game.machine import FALLBACK_QUESTIONS, GameStateMachine, fallback_question
__all__ = ["QUESTION_BUDGET", "QA", "Answer", "Concluded", "Guess", "Outcome", "OracleStep", "Question",
           "Session", "SessionState", "TurnOutcome", "TurnResult",
           "GameError", "NoPendingQuestionError", "SessionNotFoundError", "SessionStore",
           "FALLBACK_QUESTIONS", "GameStateMachine", "fallback_question"]
