# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Brave Search tool definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .local_search import register_local_search
from .web_search import register_web_search


if TYPE_CHECKING:
    from ..server import BraveSearchServer


def register_search_tools(server: BraveSearchServer) -> None:
    """Register both search tools on *server* against its search context."""
    with server.binding():
        register_web_search(server.context)
        register_local_search(server.context)


__all__ = ["register_local_search", "register_search_tools", "register_web_search"]
