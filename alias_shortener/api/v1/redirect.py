from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from alias_shortener.dependencies import get_logger, get_url_getter
from alias_shortener.logging_config import ContextLogger, error_field
from alias_shortener.schemas import response as resp
from alias_shortener.storage.errors import StorageError, URLNotFoundError
from alias_shortener.storage.strategies import URLGetter

router = APIRouter(tags=["redirect"])


@router.get("/{alias}", response_class=RedirectResponse, status_code=status.HTTP_302_FOUND)
async def redirect(
    alias: str,
    url_getter: URLGetter = Depends(get_url_getter),
    logger: ContextLogger = Depends(get_logger),
):
    """Redirect (302 Found) to the URL saved under the alias."""
    log = logger.bind(op="handlers.redirect")

    if not alias.strip():
        log.info("alias is empty")
        return resp.render(resp.error("invalid request"), status.HTTP_400_BAD_REQUEST)

    try:
        target_url = await run_in_threadpool(url_getter.get_url, alias)
    except URLNotFoundError:
        log.info("url not found", fields={"alias": alias})
        return resp.render(resp.error("not found"), status.HTTP_404_NOT_FOUND)
    except StorageError as e:
        log.error("failed to get url", fields=error_field(e))
        return resp.render(resp.error("internal error"), status.HTTP_500_INTERNAL_SERVER_ERROR)

    log.info("got url", fields={"url": target_url})

    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
