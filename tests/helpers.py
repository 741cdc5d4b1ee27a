# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Shared test helpers: an in-memory Brave API and a controllable clock."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx


WEB_PAYLOAD: dict[str, Any] = {
    "type": "search",
    "web": {
        "results": [
            {
                "title": "Model Context Protocol",
                "description": "An open protocol for connecting models to tools.",
                "url": "https://modelcontextprotocol.io",
                "language": "en",
            },
            {
                "title": "Brave Search API",
                "description": None,
                "url": "https://brave.com/search/api/",
            },
        ]
    },
}

LOCATIONS_PAYLOAD: dict[str, Any] = {
    "type": "search",
    "locations": {
        "results": [
            {"id": "loc-1", "title": "Blue Bottle"},
            {"id": "", "title": "Missing id"},
            {"id": "loc-2", "title": "Sightglass"},
        ]
    },
}

POIS_PAYLOAD: dict[str, Any] = {
    "results": [
        {
            "id": "loc-1",
            "name": "Blue Bottle",
            "address": {
                "streetAddress": "66 Mint St",
                "addressLocality": "San Francisco",
                "addressRegion": "CA",
                "postalCode": "94103",
            },
            "coordinates": {"latitude": 37.78, "longitude": -122.41},
            "phone": "+1 510-653-3394",
            "rating": {"ratingValue": 4.5, "ratingCount": 120},
            "openingHours": ["Mon-Fri 7:00-17:00", "Sat-Sun 8:00-17:00"],
            "priceRange": "$$",
        },
        {"id": "loc-2", "name": "Sightglass"},
    ]
}

DESCRIPTIONS_PAYLOAD: dict[str, Any] = {
    "descriptions": {"loc-1": "Third-wave coffee roaster.", "loc-2": None},
}


class FakeBraveAPI:
    """Routes ``httpx`` requests to canned Brave responses and records them."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.web_payload: dict[str, Any] = WEB_PAYLOAD
        self.locations_payload: dict[str, Any] = LOCATIONS_PAYLOAD
        self.pois_payload: dict[str, Any] = POIS_PAYLOAD
        self.descriptions_payload: dict[str, Any] = DESCRIPTIONS_PAYLOAD
        self.failures: dict[str, httpx.Response] = {}

    def fail(self, path_suffix: str, status_code: int, body: str = "upstream exploded") -> None:
        self.failures[path_suffix] = httpx.Response(status_code, text=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        for suffix, response in self.failures.items():
            if path.endswith(suffix):
                return response

        if path.endswith("/web/search"):
            if request.url.params.get("result_filter") == "locations":
                return httpx.Response(200, json=self.locations_payload)
            return httpx.Response(200, json=self.web_payload)
        if path.endswith("/local/pois"):
            return httpx.Response(200, json=self.pois_payload)
        if path.endswith("/local/descriptions"):
            return httpx.Response(200, json=self.descriptions_payload)
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


class FakeClock:
    """Monotonic clock stand-in advanced explicitly by tests."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCalendar:
    """UTC wall clock stand-in for the monthly window."""

    def __init__(self, year: int = 2025, month: int = 1) -> None:
        self.today = datetime(year, month, 15, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.today

    def move_to(self, year: int, month: int) -> None:
        self.today = datetime(year, month, 1, tzinfo=timezone.utc)
