"""Streaming game protocol over a persistent WebSocket.

Sessions are not bound to connections: every inbound message names its
session, one connection may drive several sessions, and a session may
be driven from several connections. Closing a connection does not end
its sessions.
"""
import asyncio
import json
import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from src.game.models import Concluded, Guess, Question, TurnOutcome
from src.server.errors import classify
from src.server.gateway import GameGateway
from src.server.models.stream import (
    INBOUND_MODELS,
    AnswerMessage,
    DoneEvent,
    EndedEvent,
    EndMessage,
    ErrorEvent,
    GetGuessMessage,
    GuessEvent,
    InboundMessage,
    QuestionEvent,
    StartMessage,
)
from src.server.routes._socket_helpers import SocketSender, receive_frame, spawn

logger = logging.getLogger(__name__)


def turn_events(outcome: TurnOutcome) -> list[BaseModel]:
    """Translate a turn outcome into outbound stream events."""
    result = outcome.result
    if isinstance(result, Question):
        return [QuestionEvent(session_id=outcome.session_id, question=result.text)]
    if isinstance(result, Guess):
        return [GuessEvent(session_id=outcome.session_id, guess=result.text)]
    events: list[BaseModel] = []
    if isinstance(result, Concluded) and result.guess is not None:
        events.append(GuessEvent(session_id=outcome.session_id, guess=result.guess))
    events.append(DoneEvent(session_id=outcome.session_id))
    return events


def create_stream_router(gateway: GameGateway, path: str = "/ws") -> APIRouter:
    """Create the streaming router with injected dependencies."""
    router = APIRouter()
    in_flight: set[asyncio.Task] = set()

    async def dispatch(message: InboundMessage) -> list[BaseModel]:
        if isinstance(message, StartMessage):
            return turn_events(await gateway.start())
        if isinstance(message, AnswerMessage):
            return turn_events(await gateway.answer(message.session_id, message.answer))
        if isinstance(message, GetGuessMessage):
            guess = await gateway.get_guess(message.session_id)
            return [GuessEvent(session_id=message.session_id, guess=guess)]
        if isinstance(message, EndMessage):
            await gateway.end(message.session_id, message.outcome, message.actual_answer)
            return [EndedEvent(session_id=message.session_id)]
        raise TypeError(f"Unhandled stream message {type(message).__name__}")

    async def handle(raw: str) -> list[BaseModel]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return [ErrorEvent(code="INVALID_JSON", error="Invalid JSON")]
        if not isinstance(data, dict) or not isinstance(data.get("type"), str) or data["type"] not in INBOUND_MODELS:
            kind = data.get("type") if isinstance(data, dict) else None
            return [ErrorEvent(code="UNKNOWN_MESSAGE_TYPE", error=f"Unknown message type: {kind!r}")]

        session_id: Optional[str] = data.get("session_id") if isinstance(data.get("session_id"), str) else None
        try:
            message = INBOUND_MODELS[data["type"]].model_validate(data)
            return await dispatch(message)
        except Exception as exc:
            info = classify(exc)
            if info.code == "INTERNAL_ERROR":
                logger.exception("Stream message %r failed", data.get("type"))
            return [ErrorEvent(
                code=info.code, error=info.message,
                session_id=session_id, details=info.details,
            )]

    async def respond(raw: str, sender: SocketSender) -> None:
        events = await handle(raw)
        await sender.send(*events)

    @router.websocket(path)
    async def game_stream(websocket: WebSocket) -> None:
        """Handle start, answer, get_guess and end messages.

        Each message runs in its own task so a slow Oracle call for one
        session does not hold up other sessions on this connection.
        """
        await websocket.accept()
        sender = SocketSender(websocket)
        logger.info("Stream connection opened")
        try:
            while True:
                raw = await receive_frame(websocket)
                spawn(in_flight, respond(raw, sender))
        except WebSocketDisconnect as exc:
            logger.info(
                "Stream connection closed (code=%s, %d request(s) in flight)",
                exc.code, len(in_flight),
            )

    return router
