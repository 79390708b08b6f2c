"""JSON-RPC tool endpoint for external agents.

Protocol, one JSON-RPC 2.0 message per text frame:
    initialize                 handshake, once per connection, before anything else
    notifications/initialized  accepted, never answered
    ping                       liveness check
    tools/list                 describes start_game, answer_question, get_guess, end_game
    tools/call                 {name, arguments} -> {content: [{type: text, text}], isError}
    <tool name>                direct call, params are the tool arguments

Tool payloads are returned as JSON text; the envelope does not interpret
them. Failures are JSON-RPC error replies with a numeric code.
"""
import asyncio
import json
import logging
import secrets
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel, ValidationError

from src.server.config import ToolsConfig
from src.server.errors import (
    RPC_INVALID_REQUEST,
    RPC_PARSE_ERROR,
    InvalidRequestError,
    MethodNotFoundError,
    NotInitializedError,
    classify,
)
from src.server.gateway import GameGateway
from src.server.models.requests import AnswerRequest, EndRequest, GuessRequest, StartRequest
from src.server.models.responses import EndResponse, GuessResponse, TurnResponse
from src.server.models.rpc import (
    RequestId,
    RpcError,
    RpcErrorResponse,
    RpcRequest,
    RpcResultResponse,
    ToolCallParams,
    ToolResult,
)
from src.server.routes._socket_helpers import SocketSender, receive_frame, spawn

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    params: type[BaseModel]
    handler: Callable[[Any], Awaitable[BaseModel]]

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.params.model_json_schema(),
        }


def build_tools(gateway: GameGateway) -> dict[str, ToolSpec]:
    """Bind the four game operations to tool descriptions."""

    async def start_game(params: StartRequest) -> TurnResponse:
        return TurnResponse.from_outcome(await gateway.start())

    async def answer_question(params: AnswerRequest) -> TurnResponse:
        return TurnResponse.from_outcome(await gateway.answer(params.session_id, params.answer))

    async def get_guess(params: GuessRequest) -> GuessResponse:
        guess = await gateway.get_guess(params.session_id)
        return GuessResponse(session_id=params.session_id, guess=guess)

    async def end_game(params: EndRequest) -> EndResponse:
        await gateway.end(params.session_id, params.outcome, params.actual_answer)
        return EndResponse(session_id=params.session_id)

    specs = (
        ToolSpec("start_game", "Start a new game session and receive the first question.",
                 StartRequest, start_game),
        ToolSpec("answer_question", "Answer the pending question with yes, no, maybe or unknown.",
                 AnswerRequest, answer_question),
        ToolSpec("get_guess", "Get the current best guess for a session (null if none yet).",
                 GuessRequest, get_guess),
        ToolSpec("end_game", "End the game with its outcome and, if the guess was wrong, the real answer.",
                 EndRequest, end_game),
    )
    return {spec.name: spec for spec in specs}


def _authorized(header: Optional[str], token: str) -> bool:
    if not header or not header.startswith("Bearer "):
        return False
    return secrets.compare_digest(header[len("Bearer "):].strip(), token)


def _error(request_id: Optional[RequestId], code: int, message: str, data: Any = None) -> RpcErrorResponse:
    return RpcErrorResponse(id=request_id, error=RpcError(code=code, message=message, data=data))


def create_tools_router(gateway: GameGateway, config: ToolsConfig, version: str) -> APIRouter:
    """Create the tool router with injected dependencies."""
    router = APIRouter()
    tools = build_tools(gateway)
    in_flight: set[asyncio.Task] = set()
    server_info = {"name": config.server_name, "version": version}

    async def call_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        spec = tools.get(name)
        if spec is None:
            raise MethodNotFoundError(f"Unknown tool '{name}'")
        params = spec.params.model_validate(arguments)
        payload = await spec.handler(params)
        return ToolResult.of(payload).model_dump()

    async def dispatch(request: RpcRequest) -> dict[str, Any]:
        if request.method == "ping":
            return {}
        if request.method == "tools/list":
            return {"tools": [spec.describe() for spec in tools.values()]}
        if request.method == "tools/call":
            call = ToolCallParams.model_validate(request.params or {})
            return await call_tool(call.name, call.arguments)
        if request.method in tools:
            return await call_tool(request.method, request.params or {})
        raise MethodNotFoundError(f"Unknown method '{request.method}'")

    async def respond(request: RpcRequest, sender: SocketSender) -> None:
        try:
            result = await dispatch(request)
        except Exception as exc:
            info = classify(exc)
            if info.code == "INTERNAL_ERROR":
                logger.exception("Tool method %s failed", request.method)
            await sender.send(_error(request.id, info.rpc_code, info.message, info.details))
            return
        await sender.send(RpcResultResponse(id=request.id, result=result))

    def parse(raw: str) -> RpcRequest | RpcErrorResponse:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return _error(None, RPC_PARSE_ERROR, "Parse error")
        if not isinstance(data, dict):
            return _error(None, RPC_INVALID_REQUEST, "Request must be a JSON object")
        try:
            return RpcRequest.model_validate(data)
        except ValidationError as exc:
            raw_id = data.get("id")
            request_id = raw_id if isinstance(raw_id, (int, float, str)) and not isinstance(raw_id, bool) else None
            return _error(request_id, RPC_INVALID_REQUEST, "Invalid request", classify(exc).details)

    @router.websocket(config.path)
    async def tool_socket(websocket: WebSocket) -> None:
        """Serve JSON-RPC tool calls on one connection."""
        if config.auth_token and not _authorized(websocket.headers.get("authorization"), config.auth_token):
            client = websocket.client.host if websocket.client else "unknown"
            logger.warning("Rejected tool connection from %s: missing or invalid bearer token", client)
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

        await websocket.accept()
        sender = SocketSender(websocket)
        initialized = False
        try:
            while True:
                parsed = parse(await receive_frame(websocket))
                if isinstance(parsed, RpcErrorResponse):
                    await sender.send(parsed)
                    continue
                request = parsed

                if request.method == "initialize":
                    if request.is_notification:
                        continue
                    if initialized:
                        exc = InvalidRequestError("Connection already initialized")
                        await sender.send(_error(request.id, exc.rpc_code, exc.message))
                        continue
                    initialized = True
                    client_info = (request.params or {}).get("clientInfo")
                    logger.info("Tool client initialized: %s", client_info)
                    await sender.send(RpcResultResponse(id=request.id, result={
                        "protocolVersion": PROTOCOL_VERSION,
                        "capabilities": {"tools": {}},
                        "serverInfo": server_info,
                    }))
                    continue

                if request.is_notification:
                    logger.debug("Tool notification %s", request.method)
                    continue
                if not initialized:
                    exc = NotInitializedError()
                    await sender.send(_error(request.id, exc.rpc_code, exc.message))
                    continue
                spawn(in_flight, respond(request, sender))
        except WebSocketDisconnect as exc:
            logger.info("Tool connection closed (code=%s)", exc.code)

    return router
