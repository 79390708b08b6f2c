"""Server configuration."""
import logging
from dataclasses import dataclass, field
from pathlib import Path
import os

from src.game.models import QUESTION_BUDGET
from src.oracle.gemini import DEFAULT_MODEL

logger = logging.getLogger(__name__)

_RECOGNISED_BOOL_VALUES = frozenset(
    ("1", "true", "yes", "0", "false", "no")
)


@dataclass(frozen=True)
class OracleConfig:
    """Configuration for the Gemini-backed Oracle.

    An empty ``api_key`` keeps the server usable: every turn then falls
    back to generic questions.
    """

    api_key: str = ""
    model: str = DEFAULT_MODEL
    timeout: float = 15.0
    hint_limit: int = 50


@dataclass(frozen=True)
class ToolsConfig:
    """Configuration for the JSON-RPC tool endpoint.

    ``auth_token``: bearer token required at connection time. Empty
        disables the check.
    """

    enabled: bool = True
    path: str = "/mcp"
    auth_token: str = ""
    server_name: str = "ai-mind-reader"


@dataclass(frozen=True)
class StreamConfig:
    enabled: bool = True
    path: str = "/ws"


@dataclass(frozen=True)
class ServerConfig:
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 4000
    question_budget: int = QUESTION_BUDGET
    db_path: Path = field(default_factory=lambda: Path("data/mindreader.db"))
    allowed_origins: tuple[str, ...] = ("*",)
    oracle: OracleConfig = field(default_factory=OracleConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)


def _parse_bool(value: str, default: bool) -> bool:
    """Parse a boolean environment variable with explicit default.

    Recognises ``true/1/yes`` and ``false/0/no`` (case-insensitive).
    Returns *default* when the value is empty or unset.
    Logs a warning and returns *default* for unrecognised values
    (e.g. typos like ``ture``).
    """
    if not value:
        return default
    normalised = value.lower()
    if normalised not in _RECOGNISED_BOOL_VALUES:
        logger.warning(
            "Unrecognised boolean value %r, using default %s. "
            "Expected one of: true/1/yes or false/0/no.",
            value,
            default,
        )
        return default
    return normalised in ("1", "true", "yes")


def _parse_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _parse_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_config_from_env() -> ServerConfig:
    question_budget = _parse_int("QUESTION_BUDGET", QUESTION_BUDGET)
    if question_budget < 1:
        raise ValueError("QUESTION_BUDGET must be at least 1")

    api_key = os.environ.get("GEMINI_API_KEY", "")
    if not api_key:
        logger.warning(
            "GEMINI_API_KEY not set -- the server will start, but every "
            "turn will use fallback questions."
        )

    tools_enabled = _parse_bool(os.environ.get("TOOLS_ENABLED", ""), default=True)
    tools_token = os.environ.get("TOOLS_AUTH_TOKEN", "")
    if tools_enabled and not tools_token:
        logger.warning(
            "Tool endpoint enabled with no TOOLS_AUTH_TOKEN -- "
            "unauthenticated access. Set TOOLS_AUTH_TOKEN or "
            "TOOLS_ENABLED=false to silence this warning."
        )

    origins = tuple(
        o.strip() for o in os.environ.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()
    )

    return ServerConfig(
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_parse_int("PORT", 4000),
        question_budget=question_budget,
        db_path=Path(os.environ.get("DB_PATH", "data/mindreader.db")),
        allowed_origins=origins or ("*",),
        oracle=OracleConfig(
            api_key=api_key,
            model=os.environ.get("GEMINI_MODEL", DEFAULT_MODEL),
            timeout=_parse_float("GEMINI_TIMEOUT", 15.0),
            hint_limit=_parse_int("MISSED_HINT_LIMIT", 50),
        ),
        stream=StreamConfig(
            enabled=_parse_bool(os.environ.get("STREAM_ENABLED", ""), default=True),
        ),
        tools=ToolsConfig(
            enabled=tools_enabled,
            auth_token=tools_token,
        ),
    )
