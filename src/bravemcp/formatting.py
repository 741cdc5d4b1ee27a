# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Plain-text rendering of search results."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import PointOfInterest, WebSearchResult


NOT_AVAILABLE = "N/A"
NO_DESCRIPTION = "No description available"
NO_LOCAL_RESULTS = "No local results found"


def format_web_results(results: Iterable[WebSearchResult]) -> str:
    return "\n\n".join(
        f"Title: {result.title}\nDescription: {result.description}\nURL: {result.url}" for result in results
    )


def format_poi(poi: PointOfInterest, descriptions: Mapping[str, str | None]) -> str:
    address = ", ".join(poi.address.parts()) if poi.address else ""
    rating_value = poi.rating.rating_value if poi.rating else None
    rating_count = poi.rating.rating_count if poi.rating else None
    hours = ", ".join(poi.opening_hours or [])
    description = descriptions.get(poi.id) if poi.id else None

    return (
        f"Name: {poi.name or NOT_AVAILABLE}\n"
        f"Address: {address or NOT_AVAILABLE}\n"
        f"Phone: {poi.phone or NOT_AVAILABLE}\n"
        f"Rating: {_number(rating_value) if rating_value is not None else NOT_AVAILABLE} "
        f"({rating_count if rating_count is not None else 0} reviews)\n"
        f"Price Range: {poi.price_range or NOT_AVAILABLE}\n"
        f"Hours: {hours or NOT_AVAILABLE}\n"
        f"Description: {description or NO_DESCRIPTION}\n"
    )


def format_local_results(pois: Iterable[PointOfInterest], descriptions: Mapping[str, str | None]) -> str:
    return "\n---\n".join(format_poi(poi, descriptions) for poi in pois) or NO_LOCAL_RESULTS


def _number(value: float) -> str:
    # 4.0 renders as "4", matching how the API's JSON numbers read
    return str(int(value)) if float(value).is_integer() else str(value)


__all__ = [
    "NOT_AVAILABLE",
    "NO_DESCRIPTION",
    "NO_LOCAL_RESULTS",
    "format_local_results",
    "format_poi",
    "format_web_results",
]
