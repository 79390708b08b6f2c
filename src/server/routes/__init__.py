"""Route handlers for the game adapters."""
from src.server.routes.game import create_game_router
from src.server.routes.stream import create_stream_router
from src.server.routes.tools import create_tools_router
__all__ = [
    "create_game_router",
    "create_stream_router",
    "create_tools_router",
]
