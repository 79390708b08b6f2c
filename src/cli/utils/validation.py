"""Input validation utilities for CLI commands."""

from src.state.models.missed_answer import MAX_ANSWER_LENGTH


def validate_server_url(url: str) -> str:
    """Validate and return a server base URL. Raises ValueError if invalid."""
    if not url or not url.strip():
        raise ValueError("Server URL cannot be empty")
    url = url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ValueError("Server URL must start with http:// or https://")
    if len(url) > 2048:
        raise ValueError("Server URL cannot exceed 2048 characters")
    return url


def validate_actual_answer(answer: str) -> str | None:
    """Validate the revealed answer. Blank means "not given" and returns None."""
    if not answer or not answer.strip():
        return None
    answer = answer.strip()
    if len(answer) > MAX_ANSWER_LENGTH:
        raise ValueError(f"Answer cannot exceed {MAX_ANSWER_LENGTH} characters")
    return answer
