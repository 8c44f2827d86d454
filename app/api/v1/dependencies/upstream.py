"""Request-scoped upstream configuration and the shared catalog."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.config import LiveUpstreamConfig, LookupUpstreamConfig, settings
from app.core.catalog import PerformerCatalog


def get_catalog(request: Request) -> PerformerCatalog:
    """Return the catalog loaded at startup."""
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        catalog = PerformerCatalog.from_path(settings.catalog_path)
        request.app.state.catalog = catalog
    return catalog


def get_live_upstream_config() -> LiveUpstreamConfig:
    return LiveUpstreamConfig.from_settings(settings)


def get_lookup_upstream_config() -> LookupUpstreamConfig:
    return LookupUpstreamConfig.from_settings(settings)


Catalog = Annotated[PerformerCatalog, Depends(get_catalog)]
LiveConfig = Annotated[LiveUpstreamConfig, Depends(get_live_upstream_config)]
LookupConfig = Annotated[LookupUpstreamConfig, Depends(get_lookup_upstream_config)]
