"""CLI utilities."""

from .validation import validate_actual_answer, validate_server_url

__all__ = [
    "validate_actual_answer",
    "validate_server_url",
]
