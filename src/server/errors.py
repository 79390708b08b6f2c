"""Error classification shared by the HTTP, stream and tool adapters."""
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from src.game.errors import GameError, NoPendingQuestionError, SessionNotFoundError

# JSON-RPC 2.0 reserved codes plus server-defined codes in -32000..-32099.
RPC_PARSE_ERROR = -32700
RPC_INVALID_REQUEST = -32600
RPC_METHOD_NOT_FOUND = -32601
RPC_INVALID_PARAMS = -32602
RPC_INTERNAL_ERROR = -32603
RPC_SESSION_NOT_FOUND = -32001
RPC_NOT_INITIALIZED = -32002
RPC_NO_PENDING_QUESTION = -32003


@dataclass(frozen=True)
class ErrorInfo:
    status_code: int
    code: str
    rpc_code: int
    message: str
    details: Optional[dict[str, Any]] = None


_GAME_ERRORS: dict[type, tuple[int, str, int]] = {
    SessionNotFoundError: (404, "SESSION_NOT_FOUND", RPC_SESSION_NOT_FOUND),
    NoPendingQuestionError: (400, "NO_PENDING_QUESTION", RPC_NO_PENDING_QUESTION),
}


class GatewayError(Exception):
    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    rpc_code: int = RPC_INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidFormatError(GatewayError):
    status_code = 400
    error_code = "INVALID_FORMAT"
    rpc_code = RPC_INVALID_PARAMS


class InvalidRequestError(GatewayError):
    status_code = 400
    error_code = "INVALID_REQUEST"
    rpc_code = RPC_INVALID_REQUEST


class MethodNotFoundError(GatewayError):
    status_code = 404
    error_code = "METHOD_NOT_FOUND"
    rpc_code = RPC_METHOD_NOT_FOUND


class NotInitializedError(GatewayError):
    status_code = 400
    error_code = "NOT_INITIALIZED"
    rpc_code = RPC_NOT_INITIALIZED

    def __init__(self) -> None:
        super().__init__("Call initialize before using tools")


def validation_fields(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce pydantic error entries to ``{field, message}`` pairs."""
    fields = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        fields.append({"field": ".".join(loc) or "(root)", "message": error.get("msg", "invalid")})
    return fields


def classify(exc: Exception) -> ErrorInfo:
    """Map an exception onto status, string code and JSON-RPC code."""
    if isinstance(exc, GatewayError):
        return ErrorInfo(exc.status_code, exc.error_code, exc.rpc_code, exc.message, exc.details)
    if isinstance(exc, ValidationError):
        return ErrorInfo(
            400, "INVALID_FORMAT", RPC_INVALID_PARAMS, "Request validation failed",
            {"fields": validation_fields(exc.errors())},
        )
    if isinstance(exc, GameError):
        for error_type, (status_code, code, rpc_code) in _GAME_ERRORS.items():
            if isinstance(exc, error_type):
                return ErrorInfo(status_code, code, rpc_code, str(exc))
    return ErrorInfo(500, "INTERNAL_ERROR", RPC_INTERNAL_ERROR, "Internal server error")
