# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""The ``brave_web_search`` tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from ..models import WebSearchArgs
from ..tool import tool


if TYPE_CHECKING:
    from ..context import SearchContext

NAME: Final[str] = "brave_web_search"

DESCRIPTION: Final[str] = (
    "Performs a web search using the Brave Search API, ideal for general queries, news, articles, and online content. "
    "Use this for broad information gathering, recent events, or when you need diverse web sources. "
    "Supports pagination, content filtering, and freshness controls. "
    "Maximum 20 results per request, with offset for pagination. "
)

INPUT_SCHEMA: Final[dict[str, Any]] = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "description": "Search query (max 400 chars, 50 words)"},
        "count": {"type": "number", "description": "Number of results (1-20, default 10)", "default": 10},
        "offset": {"type": "number", "description": "Pagination offset (max 9, default 0)", "default": 0},
    },
    "required": ["query"],
}


def register_web_search(context: SearchContext) -> None:
    """Declare ``brave_web_search``; call inside ``server.binding()``."""

    @tool(NAME, args_model=WebSearchArgs, input_schema=INPUT_SCHEMA, description=DESCRIPTION)
    async def brave_web_search(args: WebSearchArgs) -> str:
        with context.metrics.track_search("web"):
            return await context.client.web_search(args.query, args.count, args.offset)


__all__ = ["DESCRIPTION", "INPUT_SCHEMA", "NAME", "register_web_search"]
