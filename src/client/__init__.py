"""Python client for the AI Mind Reader game server."""

from .client import GameClient
from .exceptions import GameClientError

__all__ = ["GameClient", "GameClientError"]
