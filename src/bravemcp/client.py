# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Async client for the Brave Search web and local endpoints.

Every upstream request passes through the shared :class:`RateLimiter` first.
Non-2xx responses are logged and raised as :class:`UpstreamError`; nothing is
retried.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

import anyio
import httpx
from pydantic import BaseModel

from .config import DESCRIPTIONS_URL, POIS_URL, WEB_SEARCH_URL
from .formatting import format_local_results, format_web_results
from .models import (
    BraveDescriptionResponse,
    BravePoiResponse,
    BraveWebResponse,
    clamp_count,
    clamp_offset,
)
from .ratelimit import RateLimiter
from .utils import get_logger


_BODY_EXCERPT = 500

ModelT = TypeVar("ModelT", bound=BaseModel)


class UpstreamError(Exception):
    """Raised when the Brave API answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body[:_BODY_EXCERPT]
        super().__init__(f"Brave API error: {status_code} {reason}\n{self.body}")


class BraveSearchClient:
    """Issue web, POI and description lookups against the Brave API."""

    def __init__(
        self,
        api_key: str,
        *,
        rate_limiter: RateLimiter,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        web_search_url: str = WEB_SEARCH_URL,
        pois_url: str = POIS_URL,
        descriptions_url: str = DESCRIPTIONS_URL,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=timeout) if timeout is not None else httpx.AsyncClient()
        self._http = http_client
        self._headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": api_key,
        }
        self.web_search_url = web_search_url
        self.pois_url = pois_url
        self.descriptions_url = descriptions_url
        self._logger = get_logger("bravemcp.client")

    async def __aenter__(self) -> BraveSearchClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    async def web_search(self, query: str, count: int = 10, offset: int = 0) -> str:
        """Run a web search and render ``Title/Description/URL`` blocks."""
        params = {"q": query, "count": str(clamp_count(count)), "offset": str(clamp_offset(offset))}
        data = await self._get(self.web_search_url, params, BraveWebResponse)
        return format_web_results(data.web_results())

    async def local_search(self, query: str, count: int = 5) -> str:
        """Run a location search, falling back to :meth:`web_search` without hits."""
        params = {
            "q": query,
            "search_lang": "en",
            "result_filter": "locations",
            "count": str(clamp_count(count)),
        }
        data = await self._get(self.web_search_url, params, BraveWebResponse)
        location_ids = data.location_ids()

        if not location_ids:
            self._logger.info("No locations for %r; falling back to web search", query)
            return await self.web_search(query, count)

        pois, descriptions = await self._fetch_details(location_ids)
        return format_local_results(pois.results, descriptions.descriptions)

    async def get_pois(self, ids: Iterable[str]) -> BravePoiResponse:
        return await self._get(self.pois_url, _ids_params(ids), BravePoiResponse)

    async def get_descriptions(self, ids: Iterable[str]) -> BraveDescriptionResponse:
        return await self._get(self.descriptions_url, _ids_params(ids), BraveDescriptionResponse)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch_details(self, ids: list[str]) -> tuple[BravePoiResponse, BraveDescriptionResponse]:
        """Fetch POIs and descriptions concurrently; the first failure wins."""
        results: dict[str, Any] = {}

        async def _pois() -> None:
            results["pois"] = await self.get_pois(ids)

        async def _descriptions() -> None:
            results["descriptions"] = await self.get_descriptions(ids)

        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(_pois)
                tg.start_soon(_descriptions)
        except ExceptionGroup as group:
            raise group.exceptions[0] from None

        return results["pois"], results["descriptions"]

    async def _get(self, url: str, params: Any, model: type[ModelT]) -> ModelT:
        self._rate_limiter.check()
        response = await self._http.get(url, params=params, headers=self._headers)
        if not response.is_success:
            error = UpstreamError(response.status_code, response.reason_phrase, response.text)
            self._logger.error(
                "Brave API request failed",
                extra={"context": {"url": url, "status": error.status_code, "body": error.body}},
            )
            raise error
        return model.model_validate(response.json())


def _ids_params(ids: Iterable[str]) -> list[tuple[str, str]]:
    return [("ids", location_id) for location_id in ids if location_id]


__all__ = ["BraveSearchClient", "UpstreamError"]
