"""Read-only catalog of performer item ids allowed on the site."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class PerformerCatalog:
    """Immutable membership set of curated performer ``itemId`` values.

    Built once at process start and shared by every request.
    """

    __slots__ = ("_ids",)

    def __init__(self, item_ids: Iterable[str] = ()) -> None:
        self._ids = frozenset(
            cleaned for cleaned in (str(item_id).strip() for item_id in item_ids) if cleaned
        )

    def contains(self, item_id: str) -> bool:
        return item_id in self._ids

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, str) and item_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @classmethod
    def from_path(cls, path: str | Path) -> "PerformerCatalog":
        """Load ids from a JSON file or a newline-delimited text file.

        JSON may be a list of ids, or an object holding the list under
        ``itemIds``/``items``. Objects inside the list contribute their
        ``itemId`` field.
        """
        catalog_path = Path(path)
        if not catalog_path.is_file():
            logger.warning(
                "Catalog file not found, serving with an empty catalog",
                extra={"path": str(catalog_path)},
            )
            return cls()

        raw = catalog_path.read_text(encoding="utf-8")
        if catalog_path.suffix.lower() == ".json":
            ids = _ids_from_json(json.loads(raw))
        else:
            ids = [line.strip() for line in raw.splitlines() if line.strip() and not line.startswith("#")]

        catalog = cls(ids)
        logger.info("Catalog loaded", extra={"path": str(catalog_path), "size": len(catalog)})
        return catalog


def _ids_from_json(payload: object) -> list[str]:
    if isinstance(payload, dict):
        payload = payload.get("itemIds") or payload.get("items") or []
    if not isinstance(payload, list):
        return []

    ids: list[str] = []
    for entry in payload:
        if isinstance(entry, dict):
            entry = entry.get("itemId")
        if isinstance(entry, (str, int)):
            ids.append(str(entry))
    return ids
