# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

from __future__ import annotations

from pydantic import ValidationError
import pytest

from bravemcp.models import (
    BraveDescriptionResponse,
    BravePoiResponse,
    BraveWebResponse,
    LocalSearchArgs,
    WebSearchArgs,
    clamp_count,
    clamp_offset,
)
from tests.helpers import LOCATIONS_PAYLOAD, WEB_PAYLOAD


@pytest.mark.parametrize(("value", "expected"), [(-5, 1), (0, 1), (1, 1), (10, 10), (20, 20), (21, 20)])
def test_clamp_count(value: int, expected: int) -> None:
    assert clamp_count(value) == expected


@pytest.mark.parametrize(("value", "expected"), [(-1, 0), (0, 0), (4, 4), (9, 9), (100, 9)])
def test_clamp_offset(value: int, expected: int) -> None:
    assert clamp_offset(value) == expected


def test_web_response_tolerates_missing_sections() -> None:
    data = BraveWebResponse.model_validate({"type": "search"})

    assert data.web_results() == []
    assert data.location_ids() == []


def test_web_response_null_fields_become_empty_strings() -> None:
    results = BraveWebResponse.model_validate(WEB_PAYLOAD).web_results()

    assert results[1].description == ""
    assert results[0].url == "https://modelcontextprotocol.io"


def test_location_ids_skip_blank_entries() -> None:
    assert BraveWebResponse.model_validate(LOCATIONS_PAYLOAD).location_ids() == ["loc-1", "loc-2"]


def test_descriptions_allow_null_values() -> None:
    data = BraveDescriptionResponse.model_validate({"descriptions": {"a": None, "b": "text"}})

    assert data.descriptions == {"a": None, "b": "text"}


def test_tool_argument_defaults() -> None:
    assert WebSearchArgs.model_validate({"query": "q"}).model_dump() == {"query": "q", "count": 10, "offset": 0}
    assert LocalSearchArgs.model_validate({"query": "q", "extra": True}).model_dump() == {"query": "q", "count": 5}


@pytest.mark.parametrize("payload", [{}, {"query": 42}, {"query": None}, {"query": "q", "count": "many"}])
def test_tool_arguments_reject_bad_payloads(payload: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        WebSearchArgs.model_validate(payload)


def test_numeric_arguments_accept_floats() -> None:
    args = WebSearchArgs.model_validate({"query": "q", "count": 2.7, "offset": 1.0})

    assert args.count == 2
    assert args.offset == 1


@pytest.mark.parametrize(
    ("model", "payload", "expected"),
    [
        (WebSearchArgs, {"query": "q", "count": None}, {"query": "q", "count": 10, "offset": 0}),
        (WebSearchArgs, {"query": "q", "offset": None}, {"query": "q", "count": 10, "offset": 0}),
        (LocalSearchArgs, {"query": "q", "count": None}, {"query": "q", "count": 5}),
    ],
)
def test_null_numeric_arguments_fall_back_to_defaults(
    model: type[WebSearchArgs] | type[LocalSearchArgs], payload: dict[str, object], expected: dict[str, object]
) -> None:
    assert model.model_validate(payload).model_dump() == expected


def test_poi_fields_are_optional() -> None:
    data = BravePoiResponse.model_validate({"results": [{"coordinates": {"longitude": -122.4}}, {"id": None}]})

    first, second = data.results
    assert first.id is None
    assert first.name is None
    assert first.coordinates is not None
    assert first.coordinates.latitude is None
    assert first.coordinates.longitude == -122.4
    assert second.id is None
