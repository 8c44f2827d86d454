"""Pure predicates and extractors over one raw upstream performer record.

Upstream records are untyped and their shape drifts between systems, so every
accessor tolerates absent fields and alternate field names.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

PLAYER_URL_FIELDS = ("roomUrl", "iframeFeedURL", "iframeFeedUrl", "iframeUrl")
LOOSE_PLAYER_URL_FIELDS = ("roomUrl", "iframeFeedURL", "iframeFeedUrl", "embedUrl")
LIVE_STATUSES = {"live", "online"}

TAG_SOURCE_FIELDS = ("tags", "Tags", "topics", "Topics", "customTags")
TOPIC_SOURCE_FIELDS = ("customTags", "characteristicsTags", "autoTags")
TRANS_TAGS = {"trans", "transgender"}

TAG_SPLIT_PATTERN = re.compile(r"[,\s]+")


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    COUPLE = "couple"
    TRANS = "trans"
    UNKNOWN = ""


GENDER_SYNONYMS: dict[str, Gender] = {
    **dict.fromkeys(("m", "male", "man", "guy"), Gender.MALE),
    **dict.fromkeys(("f", "female", "woman", "girl"), Gender.FEMALE),
    **dict.fromkeys(("c", "couple", "pair"), Gender.COUPLE),
    **dict.fromkeys(("t", "trans", "transgender"), Gender.TRANS),
}


def _field(record: Any, name: str) -> Any:
    return record.get(name) if isinstance(record, dict) else None


def item_id(record: Any) -> str:
    """Return the trimmed ``itemId`` or an empty string."""
    value = _field(record, "itemId")
    if not value:
        return ""
    return str(value).strip()


def _has_any(record: Any, fields: tuple[str, ...]) -> bool:
    return any(bool(_field(record, name)) for name in fields)


def detect_live(record: Any) -> bool:
    """Strict live check used by the listing scan.

    Requires an explicit truthy live flag AND a playable URL. URLs alone are
    not enough since upstream keeps stale player URLs for offline rooms.
    """
    live = _field(record, "live")
    live_flag = live is True or str(live).lower() == "true"
    return live_flag and _has_any(record, PLAYER_URL_FIELDS)


def detect_live_loose(record: Any) -> bool:
    """Loose live check used by the single-performer lookup."""
    if not isinstance(record, dict):
        return False
    if record.get("live") is True:
        return True
    status = str(record.get("status") or "").lower()
    if status in LIVE_STATUSES:
        return True
    return _has_any(record, LOOSE_PLAYER_URL_FIELDS)


def normalize_gender(raw: Any) -> Gender:
    """Map a free-form gender string onto :class:`Gender`; unknown never raises."""
    if not isinstance(raw, str):
        return Gender.UNKNOWN
    return GENDER_SYNONYMS.get(raw.strip().lower(), Gender.UNKNOWN)


def record_gender(record: Any) -> Gender:
    characteristic = _field(record, "characteristic")
    candidates = (
        _field(characteristic, "genderCode"),
        _field(characteristic, "gender"),
        _field(record, "genderCode"),
        _field(record, "gender"),
    )
    for candidate in candidates:
        if candidate:
            return normalize_gender(candidate)
    return Gender.UNKNOWN


def extract_tags(raw: Any) -> list[str]:
    """Normalize a list or a delimited string into ordered lowercase tokens."""
    if isinstance(raw, list):
        tokens = (str(tag if tag is not None else "").strip().lower() for tag in raw)
    elif isinstance(raw, str):
        tokens = (tag.strip().lower() for tag in TAG_SPLIT_PATTERN.split(raw))
    else:
        return []
    return list(dict.fromkeys(token for token in tokens if token))


def record_tags(record: Any) -> list[str]:
    """Collect tags from every supported tag field of a record."""
    collected: list[str] = []
    for name in TAG_SOURCE_FIELDS:
        collected.extend(extract_tags(_field(record, name)))
    return list(dict.fromkeys(collected))


def gender_matches(record: Any, wanted: Gender) -> bool:
    if wanted is Gender.UNKNOWN:
        return True
    gender = record_gender(record)
    if wanted is Gender.TRANS:
        return gender is Gender.TRANS or not TRANS_TAGS.isdisjoint(record_tags(record))
    return gender is wanted


def name_matches(record: Any, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    name = _field(record, "nameClean") or _field(record, "name") or ""
    return needle in str(name).lower()


def topic_matches(record: Any, topic: str) -> bool:
    needle = topic.strip().lower()
    if not needle:
        return True
    bucket: list[str] = []
    for name in TOPIC_SOURCE_FIELDS:
        value = _field(record, name)
        if isinstance(value, list):
            bucket.extend(str(tag).lower() for tag in value)
    return needle in " ".join(bucket)
