"""Lenient query-string parsing for live routes."""

import re

from app.api.v1.live.constants import FALSE_VALUES, TRUE_VALUES

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean-ish flag; unrecognized values give ``default``."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return default


def parse_int(value: str | None, default: int) -> int:
    """Parse the leading integer of ``value``.

    Missing, unparsable and zero values fall back to ``default``.
    """
    match = _LEADING_INT.match(value or "")
    if not match:
        return default
    return int(match.group(1)) or default


def parse_brands(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated brand list into ordered, unique lowercase names."""
    brands = (brand.strip().lower() for brand in (value or "").split(","))
    return tuple(dict.fromkeys(brand for brand in brands if brand))
