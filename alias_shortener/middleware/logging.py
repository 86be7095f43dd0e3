"""Access logging middleware."""

import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from alias_shortener.logging_config import ContextLogger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request once the response is ready."""

    def __init__(self, app, logger: ContextLogger):
        super().__init__(app)
        self.log = logger.bind(component="middleware/logger")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        log = self.log.bind(
            method=request.method,
            path=request.url.path,
            remote_addr=request.client.host if request.client else "unknown",
            user_agent=request.headers.get("user-agent"),
            request_id=getattr(request.state, "request_id", None),
        )
        log.debug("request started")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "request completed",
            fields={"status": response.status_code, "duration": f"{duration_ms:.2f}ms"},
        )
        return response
