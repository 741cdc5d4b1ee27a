# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Tool registration utilities.

When a :class:`~bravemcp.server.BraveSearchServer` enters its
:meth:`binding <bravemcp.server.BraveSearchServer.binding>` context, functions
decorated with :func:`tool` are registered on it automatically.  Each tool
declares a pydantic model for its arguments; the tools service validates the
raw MCP arguments against that model before the handler ever runs.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel


if TYPE_CHECKING:  # pragma: no cover - type-checking helpers only
    from .server import BraveSearchServer

# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

ToolFn = Callable[[Any], Awaitable[Any]]


class InvalidArguments(ValueError):
    """Raised when tool arguments are missing or do not match the tool's model."""


@dataclass(slots=True)
class ToolSpec:
    """In-memory representation of a tool definition."""

    name: str
    fn: ToolFn
    args_model: type[BaseModel]
    input_schema: dict[str, Any]
    description: str = ""
    title: str | None = None
    annotations: dict[str, Any] | None = None


_TOOL_ATTR = "__bravemcp_tool__"
_ACTIVE_SERVER: ContextVar[BraveSearchServer | None] = ContextVar("_bravemcp_active_server", default=None)


def get_active_server() -> BraveSearchServer | None:
    """Return the server currently binding tool definitions, if any."""
    return _ACTIVE_SERVER.get()


def set_active_server(server: BraveSearchServer) -> Token[BraveSearchServer | None]:
    """Activate a server for ambient registration (internal helper)."""
    return _ACTIVE_SERVER.set(server)


def reset_active_server(token: Token[BraveSearchServer | None]) -> None:
    """Reset the active server context (internal helper)."""
    _ACTIVE_SERVER.reset(token)


def tool(
    name: str | None = None,
    *,
    args_model: type[BaseModel],
    input_schema: dict[str, Any],
    description: str | None = None,
    title: str | None = None,
    annotations: dict[str, Any] | None = None,
) -> Callable[[ToolFn], ToolFn]:
    """Decorator that marks a coroutine function as an MCP tool.

    The decorated function receives a single validated ``args_model`` instance.
    ``input_schema`` is advertised verbatim in ``tools/list``.
    """

    def decorator(fn: ToolFn) -> ToolFn:
        desc = (description if description is not None else (fn.__doc__ or "")).strip()

        spec = ToolSpec(
            name=name or fn.__name__ or "anonymous",
            fn=fn,
            args_model=args_model,
            input_schema=input_schema,
            description=desc,
            title=title,
            annotations=annotations,
        )
        setattr(fn, _TOOL_ATTR, spec)

        server = get_active_server()
        if server is not None:
            server.register_tool(spec)

        return fn

    return decorator


def extract_tool_spec(fn: ToolFn) -> ToolSpec | None:
    """Return the attached :class:`ToolSpec` for *fn*, if present."""
    spec = getattr(fn, _TOOL_ATTR, None)
    if not isinstance(spec, ToolSpec):
        return None
    return spec


__all__ = [
    "InvalidArguments",
    "ToolSpec",
    "ToolFn",
    "tool",
    "extract_tool_spec",
    "get_active_server",
    "set_active_server",
    "reset_active_server",
]
