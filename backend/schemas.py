"""Pydantic schemas for API request/response."""

from urllib.parse import urlparse

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def is_valid_url(value: str) -> bool:
    """Absolute http(s) URL with a host that contains no whitespace."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    host = parsed.hostname or ""
    if not host or any(ch.isspace() for ch in host):
        return False
    return parsed.scheme in {"http", "https"}


def _flag(name: str, camel: str):
    return Field(default=True, validation_alias=AliasChoices(name, camel))


class AnalyzeRequest(BaseModel):
    """
    Request body for POST /api/analyze.
    URL presence and format are checked by the endpoint so they map to 400.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    include_content: bool = _flag("include_content", "includeContent")
    include_technical: bool = _flag("include_technical", "includeTechnical")
    include_keywords: bool = _flag("include_keywords", "includeKeywords")
    include_backlinks: bool = _flag("include_backlinks", "includeBacklinks")
    include_competitors: bool = _flag("include_competitors", "includeCompetitors")

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, value: object) -> str:
        return str(value or "").strip()


class KeywordRequest(BaseModel):
    """Request body for POST /api/keywords."""

    url: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, value: object) -> str:
        return str(value or "").strip()


class KeywordResponse(BaseModel):
    """Response for POST /api/keywords."""

    url: str
    timestamp: str
    keywords: dict


class UsageResponse(BaseModel):
    """Static description returned by the GET endpoints."""

    message: str
    usage: str
    options: dict[str, str] = Field(default_factory=dict)
