"""
FastAPI dependencies for dependency injection.

Everything is read from app.state, where create_app() put it, so there
are no module-level singletons and tests can replace any piece through
app.dependency_overrides.

Each handler asks only for the storage capability it uses:
- save handler     -> get_url_saver
- redirect handler -> get_url_getter
- delete handler   -> get_url_deleter
"""

from fastapi import Request

from alias_shortener.config import Settings
from alias_shortener.logging_config import ContextLogger
from alias_shortener.storage.strategies import URLDeleter, URLGetter, URLSaver


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_logger(request: Request) -> ContextLogger:
    """Application logger bound to the current request id."""
    logger: ContextLogger = request.app.state.logger
    return logger.bind(request_id=getattr(request.state, "request_id", None))


def get_url_saver(request: Request) -> URLSaver:
    return request.app.state.storage


def get_url_getter(request: Request) -> URLGetter:
    return request.app.state.storage


def get_url_deleter(request: Request) -> URLDeleter:
    return request.app.state.storage
