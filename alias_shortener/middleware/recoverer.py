"""Turn unhandled exceptions into the internal error envelope."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from alias_shortener.logging_config import ContextLogger, error_field
from alias_shortener.schemas import response as resp


class RecovererMiddleware(BaseHTTPMiddleware):
    """
    Innermost user middleware: the 500 it returns still passes through the
    request id and access logging middleware.
    """

    def __init__(self, app, logger: ContextLogger):
        super().__init__(app)
        self.log = logger.bind(component="middleware/recoverer")

    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)
        except Exception as e:
            self.log.bind(request_id=getattr(request.state, "request_id", None)).error(
                "unhandled exception", exc_info=e, fields=error_field(e)
            )
            return resp.render(resp.error("internal error"), status_code=500)
