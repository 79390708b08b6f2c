"""Oracle port and implementations."""
from src.oracle.base import Oracle, OracleUnavailableError
from src.oracle.prompts import build_prompt, format_history, parse_reply
from src.oracle.gemini import DEFAULT_MODEL, GeminiOracle

__all__ = [
    "Oracle",
    "OracleUnavailableError",
    "build_prompt",
    "format_history",
    "parse_reply",
    "DEFAULT_MODEL",
    "GeminiOracle",
]
