# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

from __future__ import annotations

import json

from mcp import types

from bravemcp.server.adapters import error_result, normalize_tool_result, text_result


def test_normalize_tool_result_from_string() -> None:
    result = normalize_tool_result("hello")
    assert isinstance(result, types.CallToolResult)
    assert not result.isError
    assert result.content[0].text == "hello"
    assert result.structuredContent is None


def test_normalize_tool_result_passthrough() -> None:
    existing = text_result("ready")
    assert normalize_tool_result(existing) is existing


def test_normalize_tool_result_from_dict_payload() -> None:
    payload = {
        "content": [types.TextContent(type="text", text="ok")],
        "isError": False,
    }
    result = normalize_tool_result(payload)
    assert isinstance(result, types.CallToolResult)
    assert result.content[0].text == "ok"


def test_normalize_tool_result_flattens_iterables() -> None:
    result = normalize_tool_result(["a", ["b", "c"]])
    assert [block.text for block in result.content] == ["a", "b", "c"]


def test_normalize_tool_result_scalar() -> None:
    result = normalize_tool_result({"total": 5})
    assert result.content[0].text == json.dumps({"total": 5})


def test_normalize_tool_result_none_is_empty() -> None:
    assert normalize_tool_result(None).content == []


def test_error_result_prefixes_message() -> None:
    result = error_result("Rate limit exceeded")
    assert result.isError
    assert result.content[0].text == "Error: Rate limit exceeded"
