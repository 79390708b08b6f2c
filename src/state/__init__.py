"""State management module."""
from src.state.database import DatabaseManager
from src.state.missed_answers import record_missed_answer, recent_missed_answers
from src.state.models import MAX_ANSWER_LENGTH, MissedAnswer
from src.state.repositories import MissedAnswerRepository
__all__ = ["DatabaseManager", "record_missed_answer", "recent_missed_answers",
           "MAX_ANSWER_LENGTH", "MissedAnswer", "MissedAnswerRepository"]
