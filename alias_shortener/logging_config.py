"""
Logging setup for the URL shortener.

The logger is built once at startup and handed to every component that
needs it (app state, storage, middleware). Nothing here installs a
process-wide default logger.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ENV_LOCAL = "local"
ENV_DEV = "dev"
ENV_PROD = "prod"

LOGGER_NAME = "url_shortener"


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter carrying key-value context.

    Usage:
        log = ContextLogger(logger).bind(op="handlers.url.save")
        log.info("url added", fields={"id": 1})
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def bind(self, **fields: Any) -> "ContextLogger":
        """Return a child logger with additional context fields."""
        return ContextLogger(self.logger, {**self.extra, **fields})

    def process(self, msg, kwargs):
        fields = {**self.extra, **kwargs.pop("fields", {})}
        extra = kwargs.setdefault("extra", {})
        extra["context"] = fields
        return msg, kwargs


class ConsoleFormatter(logging.Formatter):
    """Human readable lines with the context appended as key=value pairs."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            line += " " + " ".join(f"{key}={value}" for key, value in context.items())
        return line


class JSONFormatter(logging.Formatter):
    """One JSON object per record, context fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "caller": f"{record.filename}:{record.lineno}",
            "msg": record.getMessage(),
        }
        payload.update(getattr(record, "context", None) or {})
        if record.exc_info:
            payload["stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logger(env: str, log_dir: str = ".") -> ContextLogger:
    """
    Build the application logger for the given environment.

    - local: console output to stdout, DEBUG level
    - dev:   JSON lines to dev.log, DEBUG level
    - prod:  JSON lines to prod.log, INFO level

    Raises:
        ValueError: If env is not one of the above
    """
    if env == ENV_LOCAL:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ConsoleFormatter())
        level = logging.DEBUG
    elif env == ENV_DEV:
        handler = logging.FileHandler(os.path.join(log_dir, "dev.log"))
        handler.setFormatter(JSONFormatter())
        level = logging.DEBUG
    elif env == ENV_PROD:
        handler = logging.FileHandler(os.path.join(log_dir, "prod.log"))
        handler.setFormatter(JSONFormatter())
        level = logging.INFO
    else:
        raise ValueError(f"unknown env: {env!r}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.propagate = False

    return ContextLogger(logger)


def error_field(err: BaseException) -> Dict[str, str]:
    """Context field for an error."""
    return {"error": str(err)}
