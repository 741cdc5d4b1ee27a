# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Tool capability service.

This is the outermost dispatcher for ``tools/call``.  Every failure raised while
validating arguments or running a handler is converted here into a tool-level
``isError`` result; nothing escapes as a protocol error.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import json
import logging
import time
from typing import Any

from mcp import types
from pydantic import ValidationError

from ..adapters import error_result, normalize_tool_result, text_result
from ...tool import InvalidArguments, ToolSpec, extract_tool_spec


_ARGS_PREVIEW = 100


class ToolsService:
    """Manages tool registration, listing and invocation."""

    def __init__(self, *, logger: logging.Logger) -> None:
        self._logger = logger
        self._tool_specs: dict[str, ToolSpec] = {}
        self._tool_defs: dict[str, types.Tool] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._tool_defs)

    @property
    def definitions(self) -> dict[str, types.Tool]:
        return self._tool_defs

    def register(self, target: ToolSpec | Callable[..., Any]) -> ToolSpec:
        spec = target if isinstance(target, ToolSpec) else extract_tool_spec(target)
        if spec is None:
            raise TypeError(f"{target!r} is not decorated with @tool")
        self._tool_specs[spec.name] = spec
        self._refresh_tools()
        return spec

    async def list_tools(self) -> types.ListToolsResult:
        self._logger.debug("Listing tools: %s", ", ".join(self._tool_defs))
        return types.ListToolsResult(tools=list(self._tool_defs.values()))

    async def call_tool(self, name: str, arguments: Any) -> types.CallToolResult:
        start = time.perf_counter()
        self._logger.info("Tool request received - Args: %s", _preview(arguments), extra={"tool": name})

        spec = self._tool_specs.get(name)
        if spec is None or name not in self._tool_defs:
            self._logger.warning("Unknown tool requested", extra={"tool": name})
            return text_result(f"Unknown tool: {name}", is_error=True)

        try:
            params = self._validate(spec, arguments)
            result = normalize_tool_result(await spec.fn(params))
        except Exception as exc:
            self._logger.error(
                "Tool request failed - Error: %s",
                exc,
                extra={"tool": name, "duration_ms": _elapsed_ms(start)},
            )
            return error_result(str(exc))

        self._logger.info("Tool request completed", extra={"tool": name, "duration_ms": _elapsed_ms(start)})
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(spec: ToolSpec, arguments: Any) -> Any:
        if arguments is None:
            raise InvalidArguments("No arguments provided")
        if not isinstance(arguments, Mapping):
            raise InvalidArguments(f"Invalid arguments for {spec.name}")
        try:
            return spec.args_model.model_validate(dict(arguments))
        except ValidationError as exc:
            raise InvalidArguments(f"Invalid arguments for {spec.name}") from exc

    def _refresh_tools(self) -> None:
        self._tool_defs.clear()

        for spec in self._tool_specs.values():
            annotations = None
            payload: dict[str, Any] = dict(spec.annotations or {})
            if spec.title is not None and "title" not in payload:
                payload["title"] = spec.title
            if payload:
                annotations = types.ToolAnnotations.model_validate(payload)

            self._tool_defs[spec.name] = types.Tool(
                name=spec.name,
                description=spec.description or None,
                inputSchema=spec.input_schema,
                annotations=annotations,
            )


def _preview(arguments: Any) -> str:
    try:
        rendered = json.dumps(arguments, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        rendered = repr(arguments)
    if len(rendered) > _ARGS_PREVIEW:
        return f"{rendered[:_ARGS_PREVIEW]}..."
    return rendered


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


__all__ = ["ToolsService"]
