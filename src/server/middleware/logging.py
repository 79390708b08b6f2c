"""HTTP access logging."""
import logging
import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("mindreader.server")
REDACTED_PARAMS = frozenset({"authorization", "key", "api_key", "token"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes one access line per HTTP request.

    WebSocket connections bypass ``BaseHTTPMiddleware`` and are logged by
    their own endpoints.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level, "%s %s %s -> %d (%.1fms)",
            request.client.host if request.client else "-",
            request.method,
            _describe_path(request),
            response.status_code,
            elapsed_ms,
        )
        return response


def _describe_path(request: Request) -> str:
    params = sanitize_dict(dict(request.query_params))
    if not params:
        return request.url.path
    query = "&".join(f"{k}={v}" for k, v in params.items())
    return f"{request.url.path}?{query}"


def sanitize_dict(data: dict) -> dict:
    """Mask values whose keys look like credentials, recursing into dicts."""
    return {
        key: "[REDACTED]" if key.lower() in REDACTED_PARAMS
        else sanitize_dict(value) if isinstance(value, dict)
        else value
        for key, value in data.items()
    }
