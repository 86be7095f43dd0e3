"""Middleware for the URL shortener app."""

from .request_id import RequestIDMiddleware, REQUEST_ID_HEADER
from .logging import LoggingMiddleware
from .recoverer import RecovererMiddleware

__all__ = ["RequestIDMiddleware", "REQUEST_ID_HEADER", "LoggingMiddleware", "RecovererMiddleware"]
