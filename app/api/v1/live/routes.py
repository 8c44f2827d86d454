"""Live performer listing endpoint."""

import logging

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.responses import no_store_json
from app.api.v1.dependencies import Catalog, LiveConfig
from app.api.v1.live.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    INTERNAL_ERROR,
    MISSING_CONFIG_ERROR,
)
from app.api.v1.live.utils import parse_bool, parse_brands, parse_int
from app.config import settings
from app.core.exceptions import UpstreamConfigMissingError
from app.integrations.performers_ext import UPSTREAM_PAGE_SIZE, PerformersExtClient
from app.schemas.live import (
    ErrorResponse,
    LiveDebug,
    LiveDebugMatches,
    LiveDebugRequested,
    LiveDebugUpstream,
    LiveListResponse,
)
from app.services.live.assembler import ResultPage, assemble_page
from app.services.live.classifier import normalize_gender
from app.services.live.scanner import FilterCriteria, ScanState, scan_live_pool

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_debug(
    *,
    brands_param: str,
    criteria: FilterCriteria,
    state: ScanState,
    result: ResultPage,
) -> LiveDebug:
    return LiveDebug(
        requested=LiveDebugRequested(
            brands=brands_param or "(all)",
            gender=criteria.gender.value,
            search=criteria.search,
            live=str(criteria.live_only).lower(),
            topic=criteria.topic,
            strict_topic=criteria.strict_topic,
        ),
        upstream=LiveDebugUpstream(
            pages_fetched=state.pages_fetched,
            page_size=UPSTREAM_PAGE_SIZE,
            items_seen=state.items_seen,
            items_parsed=state.items_parsed,
        ),
        matches=LiveDebugMatches(
            base_collected=len(state.served),
            topic_collected=len(state.topic),
            served_pool=result.total,
        ),
    )


@router.get(
    "/live",
    summary="List live performers",
    description=(
        "Scan the upstream listing, keep catalog performers that pass the live, "
        "gender and name filters, and return one page of results."
    ),
)
async def list_live_performers(
    catalog: Catalog,
    upstream_config: LiveConfig,
    page: str | None = Query(None),
    size: str | None = Query(None),
    brands: str | None = Query(None),
    brand: str | None = Query(None),
    gender: str | None = Query(None),
    search: str | None = Query(None),
    topic: str | None = Query(None),
    strict_topic: str | None = Query(None, alias="strictTopic"),
    live: str | None = Query(None),
    debug: str | None = Query(None),
) -> JSONResponse:
    """List currently live catalog performers."""
    version = settings.response_version
    try:
        brands_param = (brands or brand or "").strip()
        criteria = FilterCriteria(
            brands=parse_brands(brands_param),
            gender=normalize_gender(gender),
            search=search or "",
            topic=topic or "",
            strict_topic=parse_bool(strict_topic, False),
            live_only=parse_bool(live, True),
            page=parse_int(page, DEFAULT_PAGE),
            size=parse_int(size, DEFAULT_PAGE_SIZE),
        )

        async with PerformersExtClient(upstream_config) as client:
            state = await scan_live_pool(client, catalog, criteria)

        result = assemble_page(state, criteria)
        response = LiveListResponse(
            version=version,
            count=result.count,
            total=result.total,
            page=criteria.page,
            size=criteria.size,
            topic=criteria.topic,
            topic_requested=criteria.topic_requested,
            topic_applied=result.topic_applied,
            performers=result.items,
            models=result.items,
            items=result.items,
        )
        if parse_bool(debug, False):
            response.debug = _build_debug(
                brands_param=brands_param,
                criteria=criteria,
                state=state,
                result=result,
            )
        return no_store_json(response.to_payload())

    except UpstreamConfigMissingError as e:
        logger.error("Live listing unavailable: upstream not configured", extra={"missing": e.missing})
        return no_store_json(
            ErrorResponse(version=version, error=MISSING_CONFIG_ERROR).to_payload(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    except Exception as e:
        logger.exception("Live listing failed")
        return no_store_json(
            ErrorResponse(version=version, error=INTERNAL_ERROR, message=str(e)).to_payload(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
