"""Synchronous game endpoints: start, answer, guess, end."""
import logging

from fastapi import APIRouter, Query, status

from src.server.gateway import GameGateway
from src.server.models.requests import AnswerRequest, EndRequest
from src.server.models.responses import (
    EndResponse,
    ErrorResponse,
    GuessResponse,
    TurnResponse,
)

logger = logging.getLogger(__name__)

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def create_game_router(gateway: GameGateway) -> APIRouter:
    """Create game router with injected dependencies.

    Game errors propagate to the application's exception handlers, which
    turn them into ``ErrorResponse`` bodies.
    """
    router = APIRouter()

    @router.post(
        "/start",
        response_model=TurnResponse,
        status_code=status.HTTP_200_OK,
        tags=["game"],
    )
    async def start_game() -> TurnResponse:
        """Start a session and return its first question (or guess)."""
        outcome = await gateway.start()
        return TurnResponse.from_outcome(outcome)

    @router.post(
        "/answer",
        response_model=TurnResponse,
        responses=_ERRORS,
        status_code=status.HTTP_200_OK,
        tags=["game"],
    )
    async def answer_question(body: AnswerRequest) -> TurnResponse:
        """Answer the pending question and receive the next step."""
        outcome = await gateway.answer(body.session_id, body.answer)
        return TurnResponse.from_outcome(outcome)

    @router.get(
        "/guess",
        response_model=GuessResponse,
        responses=_ERRORS,
        status_code=status.HTTP_200_OK,
        tags=["game"],
    )
    async def get_guess(
        session_id: str = Query(..., min_length=1, max_length=64),
    ) -> GuessResponse:
        """Return the current guess, or null when none was made yet."""
        guess = await gateway.get_guess(session_id)
        return GuessResponse(session_id=session_id, guess=guess)

    @router.get(
        "/sessions/{session_id}",
        response_model=TurnResponse,
        responses=_ERRORS,
        status_code=status.HTTP_200_OK,
        tags=["game"],
    )
    async def get_session(session_id: str) -> TurnResponse:
        """Return the open turn, e.g. after a client reconnects."""
        outcome = await gateway.snapshot(session_id)
        return TurnResponse.from_outcome(outcome)

    @router.post(
        "/end",
        response_model=EndResponse,
        responses=_ERRORS,
        status_code=status.HTTP_200_OK,
        tags=["game"],
    )
    async def end_game(body: EndRequest) -> EndResponse:
        """End the session, recording the real answer if the guess missed."""
        await gateway.end(body.session_id, body.outcome, body.actual_answer)
        logger.info("Session %s ended: %s", body.session_id, body.outcome.value)
        return EndResponse(session_id=body.session_id)

    return router
