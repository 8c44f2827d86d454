"""Client for the CrakRevenue performers-ext listing API.

The listing API is paginated and has its own, looser notion of "live". It knows
nothing about the local catalog, so callers over-fetch and filter locally.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from app.config import LiveUpstreamConfig
from app.core.exceptions import ExternalAPIError, UpstreamConfigMissingError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

API_NAME = "performers-ext"
UPSTREAM_PAGE_SIZE = 100
UPSTREAM_SORTING = "score"
UPSTREAM_TIMEOUT_SECONDS = 8.0


class PerformersExtClient:
    """Fetch single pages of performer records from performers-ext."""

    def __init__(
        self,
        config: LiveUpstreamConfig,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS,
    ) -> None:
        missing = [
            name
            for name, value in (("CRAK_TOKEN", config.token), ("CRAK_API_KEY", config.api_key))
            if not value
        ]
        if missing:
            raise UpstreamConfigMissingError(API_NAME, missing)

        self.config = config
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "PerformersExtClient":
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                "accept": "application/json",
                "user-agent": self.config.user_agent,
                "x-api-key": self.config.api_key or "",
            },
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Client must be used as async context manager")
        return self._client

    def build_params(
        self,
        *,
        page: int,
        brands: Sequence[str],
        live_only: bool,
    ) -> dict[str, str]:
        """Build query parameters for one upstream page."""
        params = {
            "token": self.config.token or "",
            "page": str(page),
            "size": str(UPSTREAM_PAGE_SIZE),
            "sorting": UPSTREAM_SORTING,
        }
        if brands:
            params["brands"] = ",".join(brands)
        if live_only:
            params["live"] = "true"
        return params

    async def fetch_page(
        self,
        *,
        page: int,
        brands: Sequence[str],
        live_only: bool,
    ) -> list[Any]:
        """Fetch one upstream page.

        Args:
            page: 1-based upstream page number
            brands: Lowercase brand names to restrict the listing to
            live_only: Ask upstream for its own live filter as well

        Returns:
            Raw performer records; empty when the ``performers`` field is
            absent or not a list.

        Raises:
            UpstreamTimeoutError: The page did not arrive within the timeout.
            ExternalAPIError: Non-success status, transport failure or a body
                that is not JSON.
        """
        params = self.build_params(page=page, brands=brands, live_only=live_only)
        logger.debug("performers-ext page request", extra={"page": page, "brands": params.get("brands")})

        try:
            # One deadline for connect, headers and the whole body.
            async with asyncio.timeout(self.timeout):
                response = await self.client.get(self.config.base_url, params=params)
        except (httpx.TimeoutException, TimeoutError) as e:
            logger.warning("performers-ext timeout", extra={"page": page, "timeout": self.timeout})
            raise UpstreamTimeoutError(API_NAME, self.timeout) from e
        except httpx.HTTPError as e:
            logger.warning("performers-ext HTTP error", extra={"page": page, "error": str(e)})
            raise ExternalAPIError(API_NAME, str(e)) from e

        if not response.is_success:
            logger.warning(
                "performers-ext returned error status",
                extra={"page": page, "status": response.status_code},
            )
            raise ExternalAPIError(API_NAME, f"upstream {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalAPIError(API_NAME, "response body is not JSON") from e

        performers = data.get("performers") if isinstance(data, dict) else None
        if not isinstance(performers, list):
            return []
        return performers
