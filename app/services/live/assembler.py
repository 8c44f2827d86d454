"""Choose the result pool for a scan and cut the requested page out of it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.services.live.scanner import FilterCriteria, ScanState

TOPIC_MIN_YIELD_FLOOR = 4
TOPIC_MIN_YIELD_CAP = 12


@dataclass(frozen=True)
class ResultPage:
    items: list[dict[str, Any]]
    total: int
    topic_applied: bool

    @property
    def count(self) -> int:
        return len(self.items)


def topic_min_yield(size: int) -> int:
    """Topic matches needed before a non-strict topic narrows the results."""
    return max(TOPIC_MIN_YIELD_FLOOR, min(size, TOPIC_MIN_YIELD_CAP))


def select_pool(state: ScanState, criteria: FilterCriteria) -> tuple[list[dict[str, Any]], bool]:
    """Return the pool to paginate and whether the topic pool was used.

    Strict topics always use the topic pool, even when empty. A non-strict
    topic is advisory: too few matches falls back to the full served pool.
    """
    if not criteria.topic_requested:
        return state.served, False
    if criteria.strict_topic:
        return state.topic, True
    if len(state.topic) >= topic_min_yield(criteria.size):
        return state.topic, True
    return state.served, False


def assemble_page(state: ScanState, criteria: FilterCriteria) -> ResultPage:
    pool, topic_applied = select_pool(state, criteria)
    start = (criteria.page - 1) * criteria.size
    return ResultPage(
        items=pool[start : start + criteria.size],
        total=len(pool),
        topic_applied=topic_applied,
    )
