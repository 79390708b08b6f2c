"""Request models for the synchronous API and the tool methods."""
from typing import Annotated, Optional
from pydantic import BaseModel, Field, field_validator

from src.game.models import Answer, Outcome
from src.state.models.missed_answer import MAX_ANSWER_LENGTH

SessionId = Annotated[str, Field(min_length=1, max_length=64, description="Session ID from start")]


class StartRequest(BaseModel):
    pass


class AnswerRequest(BaseModel):
    session_id: SessionId
    answer: Annotated[Answer, Field(description="Answer to the pending question")]


class GuessRequest(BaseModel):
    session_id: SessionId


class EndRequest(BaseModel):
    session_id: SessionId
    outcome: Annotated[Outcome, Field(description="Who won the game")]
    actual_answer: Annotated[
        Optional[str],
        Field(max_length=MAX_ANSWER_LENGTH, description="What the player was thinking of, if the guess was wrong"),
    ] = None

    @field_validator("actual_answer")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
