"""CLI commands."""

from . import missed, play, serve

__all__ = [
    "missed",
    "play",
    "serve",
]
