"""Unit tests for the live listing endpoint."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.core.catalog import PerformerCatalog
from app.core.exceptions import ExternalAPIError
from app.main import create_app

LIVE_PATH = f"{settings.api_prefix}/live"


def _performer(item_id: str, **fields: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "itemId": item_id,
        "name": f"Performer {item_id}",
        "live": True,
        "roomUrl": f"https://rooms.example/{item_id}",
    }
    record.update(fields)
    return record


@pytest.fixture
def upstream_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "crak_token", "tok")
    monkeypatch.setattr(settings, "crak_api_key", "key")


def _install_pages(
    monkeypatch: pytest.MonkeyPatch,
    pages: list[list[Any]],
    error: Exception | None = None,
) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    class FakePerformersExtClient:
        def __init__(self, config: Any) -> None:
            self.config = config

        async def __aenter__(self) -> "FakePerformersExtClient":
            return self

        async def __aexit__(self, *args: Any) -> None:
            return None

        async def fetch_page(self, *, page: int, brands: Sequence[str], live_only: bool) -> list[Any]:
            calls.append({"page": page, "brands": list(brands), "live_only": live_only})
            if error is not None:
                raise error
            return pages[page - 1] if page <= len(pages) else []

    monkeypatch.setattr("app.api.v1.live.routes.PerformersExtClient", FakePerformersExtClient)
    return calls


@pytest.mark.usefixtures("upstream_credentials")
def test_catalog_subset_across_two_pages(monkeypatch: pytest.MonkeyPatch) -> None:
    pages = [
        [_performer(f"p{i}") for i in range(100)],
        [_performer(f"p{i}") for i in range(100, 200)],
    ]
    catalog_ids = [f"p{i}" for i in range(3, 200, 13)][:15]
    _install_pages(monkeypatch, pages)

    with TestClient(create_app(PerformerCatalog(catalog_ids))) as client:
        response = client.get(LIVE_PATH, params={"page": "1", "size": "10"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["version"] == settings.response_version
    assert payload["count"] == 10
    assert payload["total"] == 15
    ids = [p["itemId"] for p in payload["performers"]]
    assert ids == catalog_ids[:10]
    assert len(set(ids)) == 10
    assert payload["models"] == payload["performers"]
    assert payload["items"] == payload["performers"]
    assert "debug" not in payload


@pytest.mark.usefixtures("upstream_credentials")
def test_empty_upstream_returns_empty_page(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_pages(monkeypatch, [])

    with TestClient(create_app(PerformerCatalog(["a"]))) as client:
        response = client.get(LIVE_PATH)

    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == 0
    assert payload["total"] == 0
    assert payload["page"] == 1
    assert payload["size"] == 24
    assert payload["topicRequested"] is False
    assert payload["topicApplied"] is False


@pytest.mark.parametrize("params", [{}, {"page": "2", "topic": "cosplay", "debug": "1"}])
def test_missing_token_is_configuration_error(
    monkeypatch: pytest.MonkeyPatch, params: dict[str, str]
) -> None:
    monkeypatch.setattr(settings, "crak_token", None)
    monkeypatch.setattr(settings, "crak_api_key", "key")

    with TestClient(create_app(PerformerCatalog())) as client:
        response = client.get(LIVE_PATH, params=params)

    assert response.status_code == 500
    assert response.json() == {
        "ok": False,
        "version": settings.response_version,
        "error": "missing_crak_config",
    }
    assert response.headers["cache-control"] == "no-store, max-age=0"


@pytest.mark.usefixtures("upstream_credentials")
def test_upstream_failure_is_internal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_pages(monkeypatch, [], error=ExternalAPIError("performers-ext", "upstream 502", 502))

    with TestClient(create_app(PerformerCatalog())) as client:
        response = client.get(LIVE_PATH)

    assert response.status_code == 500
    payload = response.json()
    assert payload["ok"] is False
    assert payload["error"] == "internal_error"
    assert "upstream 502" in payload["message"]


@pytest.mark.usefixtures("upstream_credentials")
def test_query_parsing_and_brand_forwarding(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_pages(monkeypatch, [])

    with TestClient(create_app(PerformerCatalog())) as client:
        response = client.get(
            LIVE_PATH,
            params={"page": "abc", "size": "500", "brand": "StripChat, Streamate", "live": "off"},
        )

    payload = response.json()
    assert payload["page"] == 1
    assert payload["size"] == 60
    assert calls[0]["brands"] == ["stripchat", "streamate"]
    assert calls[0]["live_only"] is False
    assert response.headers["pragma"] == "no-cache"
    assert response.headers["expires"] == "0"


@pytest.mark.usefixtures("upstream_credentials")
def test_filters_apply_to_every_returned_record(monkeypatch: pytest.MonkeyPatch) -> None:
    page = [
        _performer("a", name="Luna", gender="female"),
        _performer("b", name="Luna", gender="male"),
        _performer("c", name="Luna", gender="female", live=False),
        _performer("d", name="Mira", gender="female"),
        _performer("e", name="Lunara", characteristic={"gender": "woman"}),
        _performer("x", name="Luna", gender="female"),
    ]
    _install_pages(monkeypatch, [page, page])

    with TestClient(create_app(PerformerCatalog(["a", "b", "c", "d", "e"]))) as client:
        response = client.get(LIVE_PATH, params={"gender": "girl", "search": "LUNA"})

    payload = response.json()
    assert [p["itemId"] for p in payload["performers"]] == ["a", "e"]
    assert payload["total"] == 2


@pytest.mark.usefixtures("upstream_credentials")
def test_sparse_topic_falls_back_and_strict_topic_empties(monkeypatch: pytest.MonkeyPatch) -> None:
    page = [_performer(f"p{i}", customTags=["cosplay"] if i < 2 else ["yoga"]) for i in range(20)]
    catalog = PerformerCatalog(p["itemId"] for p in page)
    _install_pages(monkeypatch, [page])

    with TestClient(create_app(catalog)) as client:
        advisory = client.get(LIVE_PATH, params={"topic": "cosplay", "size": "10"}).json()
        strict = client.get(
            LIVE_PATH, params={"topic": "latex", "strictTopic": "yes", "size": "10"}
        ).json()

    assert advisory["topicRequested"] is True
    assert advisory["topicApplied"] is False
    assert advisory["total"] == 20
    assert strict["topicApplied"] is True
    assert strict["total"] == 0
    assert strict["count"] == 0


@pytest.mark.usefixtures("upstream_credentials")
def test_debug_block_reports_scan_counters(monkeypatch: pytest.MonkeyPatch) -> None:
    page = [_performer(f"p{i}") for i in range(5)]
    _install_pages(monkeypatch, [page])

    with TestClient(create_app(PerformerCatalog(["p0", "p1", "p2"]))) as client:
        payload = client.get(LIVE_PATH, params={"debug": "true", "topic": "x"}).json()

    assert payload["debug"] == {
        "requested": {
            "brands": "(all)",
            "gender": "",
            "search": "",
            "live": "true",
            "topic": "x",
            "strictTopic": False,
        },
        "upstream": {"pagesFetched": 2, "pageSize": 100, "itemsSeen": 5, "itemsParsed": 3},
        "matches": {"baseCollected": 3, "topicCollected": 0, "servedPool": 3},
    }
