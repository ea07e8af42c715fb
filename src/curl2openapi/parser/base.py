"""Data models for parsed cURL commands.

The cURL parser produces a ParsedRequest; the capture store wraps it
into a Capture, which is what spec synthesis consumes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ParsedRequest(BaseModel):
    """A single HTTP request recovered from a cURL command."""

    model_config = ConfigDict(frozen=True)

    method: str = "GET"  # GET / POST / PUT / DELETE / PATCH ...
    url: str
    headers: dict[str, str] = {}
    body: str | None = None
    query: dict[str, str] | None = None


class Capture(ParsedRequest):
    """A parsed request plus the raw command it came from."""

    raw_curl: str
    project_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    response: str | None = None  # recorded response body, if any

    @classmethod
    def from_parsed(cls, parsed: ParsedRequest, raw_curl: str, **extra) -> "Capture":
        return cls(**parsed.model_dump(), raw_curl=raw_curl, **extra)


class ApiInfo(BaseModel):
    """Descriptive view of a parsed request, used for display."""

    base_url: str
    path: str
    path_params: list[str]
    query_params: dict[str, str] | None = None
    content_type: str | None = None
