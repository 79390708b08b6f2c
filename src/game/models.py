"""Session data model and turn results."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

QUESTION_BUDGET = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Answer(str, Enum):
    """Answers a human may give to a question."""
    YES = "yes"
    NO = "no"
    MAYBE = "maybe"
    UNKNOWN = "unknown"


class Outcome(str, Enum):
    """How a game ended, as reported by the human."""
    AI_WON = "ai_won"
    USER_WON = "user_won"


class SessionState(Enum):
    AWAITING_TURN = "awaiting_turn"
    TURN_PENDING = "turn_pending"
    CONCLUDED = "concluded"


@dataclass(frozen=True)
class QA:
    question: str
    answer: Answer


@dataclass(frozen=True)
class Question:
    """The Oracle asks another question."""
    text: str
    kind = "question"


@dataclass(frozen=True)
class Guess:
    """The Oracle proposes an answer."""
    text: str
    kind = "guess"


@dataclass(frozen=True)
class Concluded:
    """The session is over; ``guess`` is the last proposal, if any."""
    guess: Optional[str] = None
    kind = "concluded"


OracleStep = Union[Question, Guess]
TurnResult = Union[Question, Guess, Concluded]


@dataclass
class Session:
    """One game instance.

    Attributes:
        id: Opaque identifier, the only key shared across transports.
        history: Answered questions in the order they were asked.
        pending_question: Question awaiting the human's answer.
        current_guess: Latest guess proposed by the Oracle.
        done: Terminal flag.
        budget: Maximum number of answered questions.
        turn: Step produced for the currently open turn.
    """

    id: str
    budget: int = QUESTION_BUDGET
    history: list[QA] = field(default_factory=list)
    pending_question: Optional[str] = None
    current_guess: Optional[str] = None
    done: bool = False
    started_at: datetime = field(default_factory=_utcnow)
    ended_at: Optional[datetime] = None
    turn: Optional[OracleStep] = None

    @property
    def state(self) -> SessionState:
        if self.done:
            return SessionState.CONCLUDED
        if self.pending_question is not None:
            return SessionState.TURN_PENDING
        return SessionState.AWAITING_TURN

    @property
    def questions_asked(self) -> int:
        return len(self.history)

    @property
    def questions_remaining(self) -> int:
        return max(self.budget - len(self.history), 0)


@dataclass(frozen=True)
class TurnOutcome:
    """Immutable view of a session after an operation."""

    session_id: str
    result: TurnResult
    done: bool
    questions_asked: int
    questions_remaining: int

    @classmethod
    def of(cls, session: Session, result: TurnResult) -> "TurnOutcome":
        return cls(
            session_id=session.id,
            result=result,
            done=session.done,
            questions_asked=session.questions_asked,
            questions_remaining=session.questions_remaining,
        )
