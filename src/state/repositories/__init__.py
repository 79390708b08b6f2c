"""Repositories."""
from src.state.repositories.missed_answers import MissedAnswerRepository
__all__ = ["MissedAnswerRepository"]
