# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Utility helpers for the Brave Search MCP server."""

from __future__ import annotations

from .logger import get_logger, setup_logger


__all__ = [
    "setup_logger",
    "get_logger",
]
