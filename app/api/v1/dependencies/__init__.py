"""Reusable API dependencies shared across v1 routes."""

from app.api.v1.dependencies.upstream import (
    Catalog,
    LiveConfig,
    LookupConfig,
    get_catalog,
    get_live_upstream_config,
    get_lookup_upstream_config,
)

__all__ = [
    "Catalog",
    "LiveConfig",
    "LookupConfig",
    "get_catalog",
    "get_live_upstream_config",
    "get_lookup_upstream_config",
]
