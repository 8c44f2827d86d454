"""Scan upstream listing pages into a deduplicated, locally filtered pool.

Upstream page size and the caller's page size are unrelated, and local
filtering removes an unpredictable share of each upstream page. The scan
therefore over-fetches, one page at a time, until it has collected enough
matches, upstream runs dry, or the page ceiling is reached.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.config import DEFAULT_BRANDS
from app.core.catalog import PerformerCatalog
from app.services.live.classifier import (
    Gender,
    detect_live,
    gender_matches,
    item_id,
    name_matches,
    topic_matches,
)

logger = logging.getLogger(__name__)

MAX_SCAN_PAGES = 12
MIN_COLLECTED = 80

MIN_PAGE, MAX_PAGE = 1, 999
MIN_SIZE, MAX_SIZE = 1, 60


class PageFetcher(Protocol):
    async def fetch_page(
        self,
        *,
        page: int,
        brands: Sequence[str],
        live_only: bool,
    ) -> list[Any]: ...


def clamp(value: int, minimum: int, maximum: int) -> int:
    return min(maximum, max(minimum, value))


@dataclass(frozen=True)
class FilterCriteria:
    """Caller filters for one listing request."""

    brands: tuple[str, ...] = DEFAULT_BRANDS
    gender: Gender = Gender.UNKNOWN
    search: str = ""
    topic: str = ""
    strict_topic: bool = False
    live_only: bool = True
    page: int = 1
    size: int = 24

    def __post_init__(self) -> None:
        brands = tuple(dict.fromkeys(b.strip().lower() for b in self.brands if b and b.strip()))
        object.__setattr__(self, "brands", brands or DEFAULT_BRANDS)
        object.__setattr__(self, "search", self.search.strip())
        object.__setattr__(self, "topic", self.topic.strip())
        object.__setattr__(self, "page", clamp(self.page, MIN_PAGE, MAX_PAGE))
        object.__setattr__(self, "size", clamp(self.size, MIN_SIZE, MAX_SIZE))

    @property
    def topic_requested(self) -> bool:
        return bool(self.topic)

    @property
    def desired_collected(self) -> int:
        """Matches to collect: the requested page plus two pages of margin."""
        return max(self.page * self.size + self.size * 2, MIN_COLLECTED)


@dataclass
class ScanState:
    """Request-scoped accumulation for one scan; never shared."""

    seen: set[str] = field(default_factory=set)
    served: list[dict[str, Any]] = field(default_factory=list)
    topic: list[dict[str, Any]] = field(default_factory=list)
    pages_fetched: int = 0
    items_seen: int = 0
    items_parsed: int = 0

    def is_full(self, criteria: FilterCriteria) -> bool:
        return len(self.served) >= criteria.desired_collected


def accepts(record: Any, criteria: FilterCriteria) -> bool:
    """Apply the live, gender and name filters to a catalog record."""
    if criteria.live_only and not detect_live(record):
        return False
    if not gender_matches(record, criteria.gender):
        return False
    return name_matches(record, criteria.search)


def absorb_page(
    state: ScanState,
    records: Sequence[Any],
    criteria: FilterCriteria,
    catalog: PerformerCatalog,
) -> None:
    """Fold one upstream page into the scan state, in upstream order."""
    for record in records:
        record_id = item_id(record)
        if not record_id:
            continue
        if not catalog.contains(record_id):
            continue
        if record_id in state.seen:
            continue
        state.seen.add(record_id)

        if not accepts(record, criteria):
            continue

        state.items_parsed += 1
        state.served.append(record)
        if criteria.topic_requested and topic_matches(record, criteria.topic):
            state.topic.append(record)

        if state.is_full(criteria):
            return


async def scan_live_pool(
    fetcher: PageFetcher,
    catalog: PerformerCatalog,
    criteria: FilterCriteria,
    max_pages: int = MAX_SCAN_PAGES,
) -> ScanState:
    """Scan upstream pages sequentially and return the filled scan state.

    Stops when the served pool reaches ``criteria.desired_collected``, when
    upstream returns an empty page, or after ``max_pages`` pages. Fetch
    errors propagate unchanged; there is no retry.
    """
    state = ScanState()

    for upstream_page in range(1, max_pages + 1):
        records = await fetcher.fetch_page(
            page=upstream_page,
            brands=criteria.brands,
            live_only=criteria.live_only,
        )
        state.pages_fetched += 1
        state.items_seen += len(records)

        if not records:
            break

        absorb_page(state, records, criteria, catalog)
        if state.is_full(criteria):
            break

    logger.info(
        "Live scan finished",
        extra={
            "pages_fetched": state.pages_fetched,
            "items_seen": state.items_seen,
            "served": len(state.served),
            "topic_matches": len(state.topic),
            "desired": criteria.desired_collected,
        },
    )
    return state
