# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""The ``brave_local_search`` tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from ..models import LocalSearchArgs
from ..tool import tool


if TYPE_CHECKING:
    from ..context import SearchContext

NAME: Final[str] = "brave_local_search"

DESCRIPTION: Final[str] = (
    "Searches for local businesses and places using Brave's Local Search API. "
    "Best for queries related to physical locations, businesses, restaurants, services, etc. "
    "Returns detailed information including:\n"
    "- Business names and addresses\n"
    "- Ratings and review counts\n"
    "- Phone numbers and opening hours\n"
    "Use this when the query implies 'near me' or mentions specific locations. "
    "Automatically falls back to web search if no local results are found."
)

INPUT_SCHEMA: Final[dict[str, Any]] = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "description": "Local search query (e.g. 'pizza near Central Park')"},
        "count": {"type": "number", "description": "Number of results (1-20, default 5)", "default": 5},
    },
    "required": ["query"],
}


def register_local_search(context: SearchContext) -> None:
    """Declare ``brave_local_search``; call inside ``server.binding()``."""

    @tool(NAME, args_model=LocalSearchArgs, input_schema=INPUT_SCHEMA, description=DESCRIPTION)
    async def brave_local_search(args: LocalSearchArgs) -> str:
        with context.metrics.track_search("local"):
            return await context.client.local_search(args.query, args.count)


__all__ = ["DESCRIPTION", "INPUT_SCHEMA", "NAME", "register_local_search"]
