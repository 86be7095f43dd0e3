from typing import Optional

from pydantic import AnyUrl, BaseModel, TypeAdapter, ValidationError, field_validator
from pydantic_core import PydanticCustomError

_url_adapter = TypeAdapter(AnyUrl)


class SaveRequest(BaseModel):
    """Body of POST /url"""
    url: str
    alias: Optional[str] = None

    @field_validator("url")
    @classmethod
    def url_must_be_absolute(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("required", "is a required field")
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise PydanticCustomError("url", "is not a valid URL") from None
        # Keep the caller's spelling, AnyUrl would normalize it
        return value

    @field_validator("alias")
    @classmethod
    def blank_alias_means_generate(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class DeleteRequest(BaseModel):
    """
    Optional body of DELETE /url/{alias}.

    Lookup uses the alias from the path; a non-blank alias here must match
    it. url is accepted but unused.
    """
    url: Optional[str] = None
    alias: Optional[str] = None
