import sys

import uvicorn
from pydantic import ValidationError

from alias_shortener.app_factory import create_app
from alias_shortener.config import get_settings
from alias_shortener.logging_config import error_field, setup_logger
from alias_shortener.storage.errors import StorageError
from alias_shortener.storage.factory import StorageFactory


def main() -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return 1

    log = setup_logger(settings.env, settings.log_dir)
    log.info("starting url-shortener", fields={"env": settings.env})
    log.debug("debug messages are enabled")

    try:
        storage = StorageFactory.create(settings, logger=log)
    except (StorageError, ValueError) as e:
        log.error("failed to init storage", fields=error_field(e))
        return 1

    app = create_app(settings, logger=log, storage=storage)

    log.info("starting server", fields={"address": settings.address})

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=int(settings.idle_timeout),
        timeout_graceful_shutdown=int(settings.timeout),
        log_config=None,
    )

    log.info("server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
