"""Live listing response schemas."""

from typing import Any

from pydantic import BaseModel

from app.schemas.base import CamelModel


class LiveDebugRequested(CamelModel):
    """Echo of the parsed request filters."""

    brands: str
    gender: str
    search: str
    live: str
    topic: str
    strict_topic: bool


class LiveDebugUpstream(CamelModel):
    """Upstream scan counters."""

    pages_fetched: int
    page_size: int
    items_seen: int
    items_parsed: int


class LiveDebugMatches(CamelModel):
    """Pool sizes before pagination."""

    base_collected: int
    topic_collected: int
    served_pool: int


class LiveDebug(CamelModel):
    requested: LiveDebugRequested
    upstream: LiveDebugUpstream
    matches: LiveDebugMatches


class LiveListResponse(CamelModel):
    """Schema for the live listing envelope.

    The page of performers is repeated under ``models`` and ``items`` for
    older front-ends.
    """

    ok: bool = True
    version: str
    count: int
    total: int
    page: int
    size: int
    topic: str
    topic_requested: bool
    topic_applied: bool
    performers: list[dict[str, Any]]
    models: list[dict[str, Any]]
    items: list[dict[str, Any]]
    debug: LiveDebug | None = None


class ErrorResponse(BaseModel):
    """Schema for failed requests."""

    ok: bool = False
    version: str
    error: str
    message: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
