# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Capability service implementations for BraveSearchServer."""

from __future__ import annotations

from .tools import ToolsService


__all__ = ["ToolsService"]
