# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Brave Search MCP server primitives."""

from __future__ import annotations

from .config import SERVER_VERSION, ConfigurationError, RateLimitConfig, Settings
from .context import SearchContext
from .server import AuthorizationConfig, BraveSearchServer
from .tool import tool
from .tools import register_search_tools


__version__ = SERVER_VERSION

__all__ = [
    "AuthorizationConfig",
    "BraveSearchServer",
    "ConfigurationError",
    "RateLimitConfig",
    "SearchContext",
    "Settings",
    "register_search_tools",
    "tool",
    "__version__",
]
