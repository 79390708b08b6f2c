"""Message models for the streaming WebSocket protocol."""
from typing import Annotated, Literal, Optional, Union, Any
from pydantic import BaseModel, Field

from src.server.models.requests import AnswerRequest, EndRequest, GuessRequest


class StartMessage(BaseModel):
    type: Literal["start"]


class AnswerMessage(AnswerRequest):
    type: Literal["answer"]


class GetGuessMessage(GuessRequest):
    type: Literal["get_guess"]


class EndMessage(EndRequest):
    type: Literal["end"]


InboundMessage = Annotated[
    Union[StartMessage, AnswerMessage, GetGuessMessage, EndMessage],
    Field(discriminator="type"),
]
INBOUND_MODELS: dict[str, type[BaseModel]] = {
    "start": StartMessage,
    "answer": AnswerMessage,
    "get_guess": GetGuessMessage,
    "end": EndMessage,
}


class QuestionEvent(BaseModel):
    type: Literal["question"] = "question"
    session_id: str
    question: str


class GuessEvent(BaseModel):
    type: Literal["guess"] = "guess"
    session_id: str
    guess: Optional[str] = None


class DoneEvent(BaseModel):
    """Sent when a turn finds the session concluded, by budget exhaustion or an earlier end."""
    type: Literal["end"] = "end"
    session_id: str
    done: Literal[True] = True


class EndedEvent(BaseModel):
    """Acknowledges an explicit end request."""
    type: Literal["end"] = "end"
    session_id: str
    ended: Literal[True] = True


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    code: Literal[
        "INVALID_JSON",
        "UNKNOWN_MESSAGE_TYPE",
        "INVALID_FORMAT",
        "SESSION_NOT_FOUND",
        "NO_PENDING_QUESTION",
        "INTERNAL_ERROR",
    ]
    error: str
    session_id: Optional[str] = None
    details: Optional[dict[str, Any]] = None
