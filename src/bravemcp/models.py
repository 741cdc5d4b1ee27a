# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Pydantic models for Brave API payloads and tool arguments.

Upstream models are deliberately permissive: unknown keys are ignored and every
field the API may omit is optional, so a partial payload still parses.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationInfo, field_validator


MAX_COUNT = 20
MAX_OFFSET = 9


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# Web search
# ---------------------------------------------------------------------------


class WebSearchResult(_Lenient):
    title: str = ""
    description: str = ""
    url: str = ""

    @field_validator("title", "description", "url", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class WebResults(_Lenient):
    results: list[WebSearchResult] = Field(default_factory=list)


class LocationRef(_Lenient):
    id: str | None = None
    title: str | None = None


class LocationResults(_Lenient):
    results: list[LocationRef] = Field(default_factory=list)


class BraveWebResponse(_Lenient):
    web: WebResults | None = None
    locations: LocationResults | None = None

    def web_results(self) -> list[WebSearchResult]:
        return list(self.web.results) if self.web else []

    def location_ids(self) -> list[str]:
        if self.locations is None:
            return []
        return [ref.id for ref in self.locations.results if ref.id]


# ---------------------------------------------------------------------------
# Local search
# ---------------------------------------------------------------------------


class Address(_Lenient):
    street_address: str | None = Field(default=None, alias="streetAddress")
    address_locality: str | None = Field(default=None, alias="addressLocality")
    address_region: str | None = Field(default=None, alias="addressRegion")
    postal_code: str | None = Field(default=None, alias="postalCode")

    def parts(self) -> list[str]:
        candidates = (self.street_address, self.address_locality, self.address_region, self.postal_code)
        return [part for part in candidates if part]


class Coordinates(_Lenient):
    latitude: float | None = None
    longitude: float | None = None


class Rating(_Lenient):
    rating_value: float | None = Field(default=None, alias="ratingValue")
    rating_count: int | None = Field(default=None, alias="ratingCount")


class PointOfInterest(_Lenient):
    id: str | None = None
    name: str | None = None
    address: Address | None = None
    coordinates: Coordinates | None = None
    phone: str | None = None
    rating: Rating | None = None
    opening_hours: list[str] | None = Field(default=None, alias="openingHours")
    price_range: str | None = Field(default=None, alias="priceRange")


class BravePoiResponse(_Lenient):
    results: list[PointOfInterest] = Field(default_factory=list)


class BraveDescriptionResponse(_Lenient):
    descriptions: dict[str, str | None] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Tool arguments
# ---------------------------------------------------------------------------


class WebSearchArgs(BaseModel):
    """Arguments accepted by ``brave_web_search``."""

    model_config = ConfigDict(extra="ignore")

    query: StrictStr
    count: int = 10
    offset: int = 0

    @field_validator("count", "offset", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        return _coerce_number(value, cls.model_fields[info.field_name].default)


class LocalSearchArgs(BaseModel):
    """Arguments accepted by ``brave_local_search``."""

    model_config = ConfigDict(extra="ignore")

    query: StrictStr
    count: int = 5

    @field_validator("count", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        return _coerce_number(value, cls.model_fields[info.field_name].default)


def _coerce_number(value: Any, default: int) -> Any:
    # null means "use the default"; schemas advertise "number", so 2.5 arrives as a float
    if value is None:
        return default
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return value


def clamp_count(count: int) -> int:
    """Clamp a requested result count to the API range ``1..20``."""
    return max(1, min(count, MAX_COUNT))


def clamp_offset(offset: int) -> int:
    """Clamp a pagination offset to the API range ``0..9``."""
    return max(0, min(offset, MAX_OFFSET))


__all__ = [
    "Address",
    "BraveDescriptionResponse",
    "BravePoiResponse",
    "BraveWebResponse",
    "LocalSearchArgs",
    "PointOfInterest",
    "Rating",
    "WebSearchArgs",
    "WebSearchResult",
    "clamp_count",
    "clamp_offset",
]
