"""HTTP middleware."""
from assocvote.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
