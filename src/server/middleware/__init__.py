"""Server middleware."""
from src.server.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
