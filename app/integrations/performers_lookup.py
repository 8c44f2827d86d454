"""Client for the CrakRevenue v2 performer lookup API."""

import asyncio
import logging
from typing import Any

import httpx

from app.config import LookupUpstreamConfig
from app.core.exceptions import ExternalAPIError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

API_NAME = "performers-v2"
LOOKUP_LIMIT = 10
LOOKUP_TIMEOUT_SECONDS = 9.0

# Different upstream systems nest the result list under different keys.
RESULT_LIST_FIELDS = ("performers", "models", "items", "data")


def extract_performer_list(data: Any) -> list[Any]:
    """Return the first list found under a known result field, else []."""
    if not isinstance(data, dict):
        return []
    for field in RESULT_LIST_FIELDS:
        value = data.get(field)
        if isinstance(value, list):
            return value
    return []


class PerformerLookupClient:
    """Query the lookup API for a performer on one brand (``system``)."""

    def __init__(
        self,
        config: LookupUpstreamConfig,
        timeout: float = LOOKUP_TIMEOUT_SECONDS,
    ) -> None:
        self.config = config
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "PerformerLookupClient":
        headers = {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }
        if self.config.api_key:
            headers["X-Api-Key"] = self.config.api_key
        self._client = httpx.AsyncClient(timeout=self.timeout, headers=headers)
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Client must be used as async context manager")
        return self._client

    async def search(self, params: dict[str, str]) -> list[Any]:
        """Run one lookup query and return the performer list it yields.

        ``params`` carries ``system`` plus either ``name`` or ``search``;
        ``limit`` is added here.
        """
        query = {**params, "limit": str(LOOKUP_LIMIT)}
        logger.debug("performers-v2 lookup request", extra={"params": query})

        try:
            async with asyncio.timeout(self.timeout):
                response = await self.client.get(self.config.base_url, params=query)
        except (httpx.TimeoutException, TimeoutError) as e:
            raise UpstreamTimeoutError(API_NAME, self.timeout) from e
        except httpx.HTTPError as e:
            raise ExternalAPIError(API_NAME, str(e)) from e

        if not response.is_success:
            raise ExternalAPIError(API_NAME, f"Upstream {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalAPIError(API_NAME, "response body is not JSON") from e

        return extract_performer_list(data)
