"""API middleware."""

from matinv.api.middleware.error_handler import ErrorHandlerMiddleware
from matinv.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
