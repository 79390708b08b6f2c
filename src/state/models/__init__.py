"""State models."""
from src.state.models.missed_answer import MAX_ANSWER_LENGTH, MissedAnswer
__all__ = ["MAX_ANSWER_LENGTH", "MissedAnswer"]
