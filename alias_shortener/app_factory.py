"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from alias_shortener.api.v1 import redirect, urls
from alias_shortener.config import Settings
from alias_shortener.logging_config import ContextLogger, setup_logger
from alias_shortener.middleware import (
    LoggingMiddleware,
    RecovererMiddleware,
    RequestIDMiddleware,
)
from alias_shortener.schemas import response as resp
from alias_shortener.storage.factory import StorageFactory
from alias_shortener.storage.strategies import URLStorage


def create_app(
    settings: Settings,
    logger: Optional[ContextLogger] = None,
    storage: Optional[URLStorage] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Loaded settings
        logger: Application logger (built from settings.env when omitted)
        storage: URL storage (built from settings when omitted)

    Raises:
        StorageError: If the configured storage cannot be opened
    """
    if logger is None:
        logger = setup_logger(settings.env, settings.log_dir)
    if storage is None:
        storage = StorageFactory.create(settings, logger=logger)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("closing storage")
        storage.close()

    app = FastAPI(
        title="URL Shortener",
        description="Alias based URL shortener",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.logger = logger
    app.state.storage = storage

    # Last added runs first: request id, then access log, then recoverer
    app.add_middleware(RecovererMiddleware, logger=logger)
    app.add_middleware(LoggingMiddleware, logger=logger)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return resp.render(
            resp.error(str(exc.detail)),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    # /url routes before the catch-all /{alias}
    app.include_router(urls.router)
    app.include_router(redirect.router)

    return app
