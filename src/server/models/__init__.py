"""Pydantic models for request/response validation."""
from src.server.models.requests import StartRequest, AnswerRequest, GuessRequest, EndRequest
from src.server.models.responses import (
    TurnResponse,
    GuessResponse,
    EndResponse,
    ErrorDetail,
    ErrorResponse,
)
from src.server.models.stream import (
    InboundMessage,
    QuestionEvent,
    GuessEvent,
    DoneEvent,
    EndedEvent,
    ErrorEvent,
)
from src.server.models.rpc import RpcRequest, RpcError, RpcErrorResponse, RpcResultResponse, ToolResult, ToolCallParams

__all__ = [
    "StartRequest",
    "AnswerRequest",
    "GuessRequest",
    "EndRequest",
    "TurnResponse",
    "GuessResponse",
    "EndResponse",
    "ErrorDetail",
    "ErrorResponse",
    "InboundMessage",
    "QuestionEvent",
    "GuessEvent",
    "DoneEvent",
    "EndedEvent",
    "ErrorEvent",
    "RpcRequest",
    "RpcError",
    "RpcErrorResponse",
    "RpcResultResponse",
    "ToolResult",
    "ToolCallParams",
]
