"""Response models for the synchronous API and tool results."""
from typing import Annotated, Literal, Optional, Any
from pydantic import BaseModel, Field

from src.game.models import Concluded, Guess, Question, TurnOutcome


class TurnResponse(BaseModel):
    session_id: Annotated[str, Field()]
    kind: Annotated[Literal["question", "guess", "concluded"], Field()]
    question: Optional[str] = None
    guess: Optional[str] = None
    done: bool
    questions_asked: int
    questions_remaining: int

    @classmethod
    def from_outcome(cls, outcome: TurnOutcome) -> "TurnResponse":
        result = outcome.result
        question = result.text if isinstance(result, Question) else None
        if isinstance(result, Guess):
            guess = result.text
        elif isinstance(result, Concluded):
            guess = result.guess
        else:
            guess = None
        return cls(
            session_id=outcome.session_id,
            kind=result.kind,
            question=question,
            guess=guess,
            done=outcome.done,
            questions_asked=outcome.questions_asked,
            questions_remaining=outcome.questions_remaining,
        )


class GuessResponse(BaseModel):
    session_id: Annotated[str, Field()]
    guess: Optional[str] = None


class EndResponse(BaseModel):
    session_id: Annotated[str, Field()]
    ended: Literal[True] = True


class ErrorDetail(BaseModel):
    code: Annotated[
        Literal[
            "INVALID_FORMAT",
            "SESSION_NOT_FOUND",
            "NO_PENDING_QUESTION",
            "INVALID_REQUEST",
            "METHOD_NOT_FOUND",
            "NOT_INITIALIZED",
            "INTERNAL_ERROR",
        ],
        Field(),
    ]
    message: Annotated[str, Field()]
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
