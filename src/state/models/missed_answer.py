"""Missed answer model."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

MAX_ANSWER_LENGTH = 200


@dataclass(frozen=True)
class MissedAnswer:
    """What a player was thinking of when the Oracle failed to guess it.

    Attributes:
        answer: The concept the player revealed at the end of the game.
        session_id: The game session the answer came from, if known.
        recorded_at: When the answer was recorded.
    """

    answer: str
    session_id: Optional[str] = None
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate required fields."""
        if not self.answer or not self.answer.strip():
            raise ValueError("answer cannot be empty")
        if len(self.answer) > MAX_ANSWER_LENGTH:
            raise ValueError(f"answer exceeds {MAX_ANSWER_LENGTH} characters")
