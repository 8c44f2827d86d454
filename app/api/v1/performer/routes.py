"""Single performer lookup endpoint."""

import logging

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.responses import no_store_json
from app.api.v1.dependencies import Catalog, LookupConfig
from app.api.v1.live.constants import INTERNAL_ERROR
from app.config import settings
from app.integrations.performers_lookup import PerformerLookupClient
from app.schemas.live import ErrorResponse
from app.schemas.performer import PerformerLookupResponse
from app.services.performer_resolver import resolve_performer

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_PARAMS_DETAIL = "Missing required query params: brand and name"


@router.get(
    "/performer",
    summary="Look up one performer",
    description=(
        "Resolve a performer by brand and name. Performers outside the catalog "
        "are reported as not found unless raw=1 is passed."
    ),
)
async def get_performer(
    catalog: Catalog,
    upstream_config: LookupConfig,
    brand: str | None = Query(None),
    system: str | None = Query(None),
    name: str | None = Query(None),
    raw: str | None = Query(None),
) -> JSONResponse:
    """Resolve a single performer."""
    version = settings.response_version
    brand_value = brand or system or ""
    name_value = name or ""

    if not brand_value or not name_value:
        return no_store_json(
            ErrorResponse(version=version, error=MISSING_PARAMS_DETAIL).to_payload(),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        async with PerformerLookupClient(upstream_config) as client:
            resolution = await resolve_performer(
                client,
                catalog,
                brand=brand_value,
                name=name_value,
                allow_raw=raw == "1",
            )
    except Exception as e:
        logger.exception("Performer lookup failed", extra={"brand": brand_value})
        return no_store_json(
            ErrorResponse(version=version, error=INTERNAL_ERROR, message=str(e)).to_payload(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = PerformerLookupResponse(
        version=version,
        not_found=not resolution.found,
        performer=resolution.performer,
        model=resolution.performer,
        live=resolution.live,
        error=resolution.error,
    )
    return no_store_json(response.to_payload())
