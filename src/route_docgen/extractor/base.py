"""Data models for routes recovered from source files.

The syntax and comment extractors produce raw facts; the merger and
normalizer turn them into RouteDescriptor objects, which are the only
thing the renderers consume.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

STATUS_CODE_RE = re.compile(r"^\d{3}$")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"

    @classmethod
    def from_name(cls, name: str) -> "HttpMethod | None":
        """Return the method for a case-insensitive name, or None."""
        return cls.__members__.get(name.upper())


class RouteFact(BaseModel):
    """A `<object>.<verb>(<path>, ...handlers)` call found in source."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str
    handler_names: tuple[str, ...] = ()
    source_position: int  # byte offset of the call expression
    file: str = ""


class DocParam(BaseModel):
    """A parameter documented with an @param tag."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    required: bool = True
    description: str = ""
    default: str | None = None


class DocFact(BaseModel):
    """Structured data recovered from one @route block comment."""

    model_config = ConfigDict(frozen=True)

    summary: str = ""
    description: str = ""
    explicit_path: str | None = None
    parameters: tuple[DocParam, ...] = ()
    responses: dict[str, str] = {}  # {status_code: description}
    tags: tuple[str, ...] = ()
    security: tuple[str, ...] = ()
    comment_end_position: int


class Param(BaseModel):
    """A documented parameter classified as a path or query parameter."""

    name: str
    location: str  # path / query
    required: bool
    param_type: str
    description: str = ""
    default: str | None = None


class RouteDescriptor(BaseModel):
    """A merged, normalized endpoint, consumed by every renderer."""

    method: HttpMethod
    path: str
    handler_names: list[str] = []
    source_position: int = 0
    file: str = ""
    summary: str
    description: str = ""
    parameters: list[Param] = []
    responses: dict[str, str]
    tags: list[str] = []
    security: list[str] = []
    operation_id: str
    documented: bool = False

    @field_validator("path")
    @classmethod
    def _path_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("route path must not be empty")
        return value

    @field_validator("responses")
    @classmethod
    def _status_codes(cls, value: dict[str, str]) -> dict[str, str]:
        for code in value:
            if not STATUS_CODE_RE.match(code):
                raise ValueError(f"response key {code!r} is not a 3-digit status code")
        return value
