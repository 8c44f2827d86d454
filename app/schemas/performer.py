"""Single performer lookup response schemas."""

from typing import Any, ClassVar

from app.schemas.base import CamelModel


class PerformerLookupResponse(CamelModel):
    """Schema for the performer lookup envelope.

    ``model`` mirrors ``performer`` for older front-ends.
    """

    nullable_keys: ClassVar[frozenset[str]] = frozenset({"performer", "model"})

    ok: bool = True
    version: str
    not_found: bool
    performer: dict[str, Any] | None
    model: dict[str, Any] | None
    live: bool
    error: str | None = None
