"""Exception types for the game client."""


class GameClientError(Exception):
    """A request to the game server failed.

    ``status_code`` is None when no response was received. ``code`` is the
    server's error code (e.g. ``SESSION_NOT_FOUND``) when it sent one.
    """
    def __init__(self, message: str, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
