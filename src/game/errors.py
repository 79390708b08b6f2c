"""Game-level error types."""


class GameError(Exception):
    """Base class for game operation errors."""


class SessionNotFoundError(GameError):
    """Raised when a session id is unknown."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session '{session_id}' not found")
        self.session_id = session_id


class NoPendingQuestionError(GameError):
    """Raised when an answer arrives while no question is outstanding."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session '{session_id}' has no pending question")
        self.session_id = session_id
