"""Resolve one performer by brand and name against the lookup API."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

from app.core.catalog import PerformerCatalog
from app.core.exceptions import ExternalAPIError
from app.services.live.classifier import detect_live_loose, item_id

logger = logging.getLogger(__name__)

NAME_CLEAN_PATTERN = re.compile(r"[^a-z0-9_\-]")
NOT_FOUND_MESSAGE = "not found"


class PerformerSearcher(Protocol):
    async def search(self, params: dict[str, str]) -> list[Any]: ...


@dataclass(frozen=True)
class PerformerResolution:
    performer: dict[str, Any] | None
    live: bool = False
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.performer is not None


def clean_performer_name(name: str) -> str:
    return NAME_CLEAN_PATTERN.sub("", name.lower())


def build_query_variants(brand: str, name: str) -> list[dict[str, str]]:
    """Query variants in the order they are attempted."""
    return [
        {"system": brand, "name": name},
        {"system": brand, "name": clean_performer_name(name)},
        {"system": brand, "search": name},
    ]


def pick_best_match(performers: list[Any], name: str) -> dict[str, Any] | None:
    """Exact cleaned-name match, then exact raw name, then the first result."""
    candidates = [p for p in performers if isinstance(p, dict)]
    name_clean = clean_performer_name(name)
    raw_name = name.lower()

    for performer in candidates:
        if str(performer.get("nameClean") or "").lower() == name_clean:
            return performer
    for performer in candidates:
        if str(performer.get("name") or "").lower() == raw_name:
            return performer
    return candidates[0] if candidates else None


async def resolve_performer(
    searcher: PerformerSearcher,
    catalog: PerformerCatalog,
    *,
    brand: str,
    name: str,
    allow_raw: bool = False,
) -> PerformerResolution:
    """Look a performer up, trying each query variant until one yields results.

    Failed attempts are logged and skipped. Unless ``allow_raw`` is set, a
    pick outside the catalog is reported exactly like a miss.
    """
    performers: list[Any] = []
    last_error: ExternalAPIError | None = None

    for attempt, params in enumerate(build_query_variants(brand, name), start=1):
        try:
            performers = await searcher.search(params)
        except ExternalAPIError as e:
            logger.warning(
                "Performer lookup attempt failed",
                extra={"attempt": attempt, "brand": brand, "error": e.message},
            )
            last_error = e
            continue
        if performers:
            break

    pick = pick_best_match(performers, name)
    if pick is None:
        return PerformerResolution(
            performer=None,
            error=last_error.message if last_error else NOT_FOUND_MESSAGE,
        )

    if not allow_raw and not catalog.contains(item_id(pick)):
        logger.info(
            "Performer outside catalog",
            extra={"brand": brand, "item_id": item_id(pick)},
        )
        return PerformerResolution(performer=None, error=NOT_FOUND_MESSAGE)

    return PerformerResolution(performer=pick, live=detect_live_loose(pick))
