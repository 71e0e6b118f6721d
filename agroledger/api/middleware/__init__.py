"""API middleware."""

from agroledger.api.middleware.error_handler import ErrorHandlerMiddleware
from agroledger.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
