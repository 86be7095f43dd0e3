"""
Response envelope shared by all JSON endpoints.

    {"status": "OK"}
    {"status": "Error", "error": "invalid request", "fields": {"url": "is not a valid URL"}}

Optional members are left out of the body when unset.
"""

from typing import Dict, Literal, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

STATUS_OK = "OK"
STATUS_ERROR = "Error"

# pydantic error type -> reason shown to the client
_FIELD_REASONS = {
    "missing": "is a required field",
    "required": "is a required field",
    "url": "is not a valid URL",
}


class Response(BaseModel):
    status: Literal["OK", "Error"]
    error: Optional[str] = None
    fields: Optional[Dict[str, str]] = None


class AliasResponse(Response):
    alias: Optional[str] = None


def ok(alias: Optional[str] = None) -> AliasResponse:
    return AliasResponse(status=STATUS_OK, alias=alias)


def error(message: str, fields: Optional[Dict[str, str]] = None) -> Response:
    return Response(status=STATUS_ERROR, error=message, fields=fields)


def validation_error(exc: ValidationError) -> Response:
    """Collapse pydantic errors into one "invalid request" body."""
    fields: Dict[str, str] = {}
    for err in exc.errors():
        name = ".".join(str(part) for part in err["loc"]) or "request"
        fields.setdefault(name, _FIELD_REASONS.get(err["type"], "is not valid"))
    return error("invalid request", fields=fields)


def render(body: Response, status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        content=body.model_dump(exclude_none=True),
        status_code=status_code,
        headers=headers,
    )
