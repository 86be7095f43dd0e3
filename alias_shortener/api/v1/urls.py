"""
Authenticated /url endpoints: create and delete alias mappings.
"""

import json

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from alias_shortener.config import Settings
from alias_shortener.dependencies import (
    get_logger,
    get_settings_dep,
    get_url_deleter,
    get_url_saver,
)
from alias_shortener.logging_config import ContextLogger, error_field
from alias_shortener.schemas import response as resp
from alias_shortener.schemas.url import DeleteRequest, SaveRequest
from alias_shortener.security import require_basic_auth
from alias_shortener.services.alias_generator import generate_alias
from alias_shortener.storage.errors import StorageError, URLExistsError, URLNotFoundError
from alias_shortener.storage.strategies import URLDeleter, URLSaver

router = APIRouter(
    prefix="/url",
    tags=["urls"],
    dependencies=[Depends(require_basic_auth)],
)


class BodyDecodeError(Exception):
    """Request body is not valid JSON."""


async def _read_json(request: Request, required: bool = True):
    raw = await request.body()
    if not raw and not required:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise BodyDecodeError(str(e)) from e


@router.post("", response_model=resp.AliasResponse)
async def save_url(
    request: Request,
    url_saver: URLSaver = Depends(get_url_saver),
    settings: Settings = Depends(get_settings_dep),
    logger: ContextLogger = Depends(get_logger),
) -> JSONResponse:
    """Create a mapping; generates the alias when none is given."""
    log = logger.bind(op="handlers.url.save")

    try:
        payload = await _read_json(request)
    except BodyDecodeError as e:
        log.error("failed to decode request body", fields=error_field(e))
        return resp.render(resp.error("failed to decode request"), status.HTTP_400_BAD_REQUEST)

    try:
        req = SaveRequest.model_validate(payload)
    except ValidationError as e:
        log.error("invalid request", fields=error_field(e))
        return resp.render(resp.validation_error(e), status.HTTP_400_BAD_REQUEST)

    log.info("request body decoded", fields={"request": req.model_dump()})

    alias = req.alias or generate_alias(settings.alias_length)

    try:
        url_id = await run_in_threadpool(url_saver.save_url, req.url, alias)
    except URLExistsError:
        log.info("url already exists", fields={"url": req.url, "alias": alias})
        return resp.render(resp.error("url already exists"), status.HTTP_409_CONFLICT)
    except StorageError as e:
        log.error("failed to add url", fields=error_field(e))
        return resp.render(resp.error("failed to add url"), status.HTTP_500_INTERNAL_SERVER_ERROR)

    log.info("url added", fields={"id": url_id, "alias": alias})

    return resp.render(resp.ok(alias))


@router.delete("/{alias}", response_model=resp.AliasResponse)
async def delete_url(
    alias: str,
    request: Request,
    url_deleter: URLDeleter = Depends(get_url_deleter),
    logger: ContextLogger = Depends(get_logger),
) -> JSONResponse:
    """
    Delete the mapping for the alias in the path.

    A JSON body ({"url": ..., "alias": ...}) is allowed but not required.
    A non-blank body alias must equal the path alias; the body url is unused.
    """
    log = logger.bind(op="handlers.url.delete")

    try:
        payload = await _read_json(request, required=False)
    except BodyDecodeError as e:
        log.error("failed to decode request body", fields=error_field(e))
        return resp.render(resp.error("failed to decode request"), status.HTTP_400_BAD_REQUEST)

    body_alias = None
    if payload is not None:
        try:
            req = DeleteRequest.model_validate(payload)
        except ValidationError as e:
            log.error("invalid request", fields=error_field(e))
            return resp.render(resp.validation_error(e), status.HTTP_400_BAD_REQUEST)
        log.info("request body decoded", fields={"request": req.model_dump()})
        body_alias = req.alias

    if not alias.strip():
        log.error("alias can't be empty")
        return resp.render(
            resp.error("alias can't be empty", fields={"alias": "is a required field"}),
            status.HTTP_400_BAD_REQUEST,
        )

    if body_alias and body_alias.strip() and body_alias != alias:
        log.error("alias in body does not match path", fields={"alias": alias, "body_alias": body_alias})
        return resp.render(
            resp.error("invalid request", fields={"alias": "does not match path"}),
            status.HTTP_400_BAD_REQUEST,
        )

    try:
        await run_in_threadpool(url_deleter.delete_url, alias)
    except URLNotFoundError:
        log.info("url not found", fields={"alias": alias})
        return resp.render(resp.error("url not found"), status.HTTP_404_NOT_FOUND)
    except StorageError as e:
        log.error("failed to delete url", fields=error_field(e))
        return resp.render(resp.error("failed to delete url"), status.HTTP_500_INTERNAL_SERVER_ERROR)

    log.info("url deleted", fields={"alias": alias})

    return resp.render(resp.ok(alias))
