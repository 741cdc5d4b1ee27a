# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Per-server state shared by the tool handlers.

All mutable state (rate counters, metrics, the HTTP client) hangs off a
:class:`SearchContext` owned by a single server instance.  Two servers built
from two contexts never observe each other's counters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from .client import BraveSearchClient
from .config import Settings
from .metrics import SearchMetrics
from .ratelimit import RateLimiter


@dataclass(slots=True)
class SearchContext:
    settings: Settings
    rate_limiter: RateLimiter
    metrics: SearchMetrics
    client: BraveSearchClient

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
        metrics: SearchMetrics | None = None,
        **limiter_options: Any,
    ) -> SearchContext:
        """Wire a limiter, metrics registry and API client from ``settings``.

        ``limiter_options`` are forwarded to :class:`RateLimiter` (e.g. a fake
        ``clock`` in tests).
        """
        metrics = metrics if metrics is not None else SearchMetrics()
        limiter = RateLimiter(
            settings.rate_limit.per_second,
            settings.rate_limit.per_month,
            metrics=metrics,
            **limiter_options,
        )
        client = BraveSearchClient(
            settings.api_key,
            rate_limiter=limiter,
            http_client=http_client,
            timeout=settings.http_timeout,
            web_search_url=settings.web_search_url,
            pois_url=settings.pois_url,
            descriptions_url=settings.descriptions_url,
        )
        return cls(settings=settings, rate_limiter=limiter, metrics=metrics, client=client)

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = ["SearchContext"]
