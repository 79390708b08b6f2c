"""FastAPI application factory."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from src.game.errors import GameError
from src.game.store import SessionStore
from src.oracle.base import Oracle
from src.oracle.gemini import GeminiOracle
from src.server.config import ServerConfig, load_config_from_env
from src.server.errors import GatewayError, classify, validation_fields
from src.server.gateway import GameGateway
from src.server.middleware.logging import RequestLoggingMiddleware
from src.server.models.responses import ErrorResponse, ErrorDetail
from src.server.routes.game import create_game_router
from src.server.routes.stream import create_stream_router
from src.server.routes.tools import create_tools_router
from src.state.database import DatabaseManager
from src.state.missed_answers import recent_missed_answers

logger = logging.getLogger(__name__)


def _build_oracle(config: ServerConfig, db_manager: DatabaseManager) -> GeminiOracle:
    """Build the Gemini oracle, feeding it recent missed answers as hints."""
    async def hints() -> Sequence[str]:
        if not db_manager.is_initialized or config.oracle.hint_limit <= 0:
            return []
        return await recent_missed_answers(db_manager, config.oracle.hint_limit)

    oracle = GeminiOracle(
        api_key=config.oracle.api_key,
        model=config.oracle.model,
        timeout=config.oracle.timeout,
        hints=hints,
    )
    logger.info("Oracle: Gemini model %s", oracle.model)
    return oracle


def create_app(config: Optional[ServerConfig] = None, oracle: Optional[Oracle] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    When called without arguments (e.g. via uvicorn --factory), loads
    configuration from environment variables. ``oracle`` replaces the
    Gemini oracle, mainly for tests.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if config is None:
        config = load_config_from_env()

    db_manager = DatabaseManager(config.db_path)
    if oracle is None:
        oracle = _build_oracle(config, db_manager)
    store = SessionStore(question_budget=config.question_budget)
    gateway = GameGateway(store, oracle, db_manager)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await db_manager.initialize()
        logger.info("Database initialized at %s", config.db_path)
        yield
        await db_manager.close()
        logger.info("Shutting down with %d session(s) in memory", len(store))

    app = FastAPI(
        title="AI Mind Reader",
        description="Twenty questions against an AI oracle over HTTP, WebSocket and JSON-RPC tools",
        version=config.version,
        lifespan=lifespan,
    )
    app.state.gateway = gateway
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameError, _game_error_handler)
    app.add_exception_handler(GatewayError, _game_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _internal_error_handler)
    app.include_router(create_game_router(gateway))

    if config.stream.enabled:
        app.include_router(create_stream_router(gateway, config.stream.path))
        logger.info("Stream endpoint active at %s", config.stream.path)
    else:
        logger.info("Stream endpoint disabled")

    if config.tools.enabled:
        app.include_router(create_tools_router(gateway, config.tools, config.version))
        logger.info(
            "Tool endpoint active at %s (auth=%s)",
            config.tools.path, "bearer" if config.tools.auth_token else "none",
        )
    else:
        logger.info("Tool endpoint disabled")

    return app


def _error_response(status_code: int, code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    response = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=response.model_dump())


async def _game_error_handler(request: Request, exc: Exception) -> JSONResponse:
    info = classify(exc)
    return _error_response(info.status_code, info.code, info.message, info.details)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, "INVALID_FORMAT", "Request validation failed", {"fields": validation_fields(exc.errors())})


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, "INVALID_FORMAT", "Request validation failed", {"fields": validation_fields(exc.errors())})


async def _internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "INTERNAL_ERROR", "Internal server error")
