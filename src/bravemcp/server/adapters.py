# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Normalization helpers for tool handler results.

Handlers return plain strings in the common case; these helpers turn whatever a
handler produced into a ``CallToolResult`` carrying text content blocks.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
from typing import Any

from mcp import types


__all__ = ["error_result", "normalize_tool_result", "text_result"]


def text_result(text: str, *, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)], isError=is_error)


def error_result(message: str) -> types.CallToolResult:
    """Build the tool-level error surface: ``isError`` with an ``Error:`` prefix."""
    return text_result(f"Error: {message}", is_error=True)


def normalize_tool_result(value: Any) -> types.CallToolResult:
    """Coerce arbitrary tool handler output into ``CallToolResult``."""

    if isinstance(value, types.CallToolResult):
        return value

    if isinstance(value, dict) and "content" in value:
        return types.CallToolResult.model_validate(value)

    return types.CallToolResult(content=_coerce_content_blocks(value), isError=False)


def _coerce_content_blocks(source: Any) -> list[types.ContentBlock]:
    if source is None:
        return []

    if isinstance(source, types.TextContent):
        return [source]

    if isinstance(source, str):
        return [types.TextContent(type="text", text=source)]

    if isinstance(source, Iterable) and not isinstance(source, (bytes, bytearray, dict)):
        blocks: list[types.ContentBlock] = []
        for item in source:
            blocks.extend(_coerce_content_blocks(item))
        return blocks

    return [_as_text_content(source)]


def _as_text_content(value: Any) -> types.TextContent:
    try:
        text = json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        text = str(value)
    return types.TextContent(type="text", text=text)
