# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Transport adapters for the Brave Search MCP server.

These thin wrappers isolate the reference SDK's transport primitives so that
the server class never touches Starlette or uvicorn directly.
"""

from __future__ import annotations

from ._asgi import ASGITransportBase
from .base import BaseTransport, TransportFactory
from .sse import SSETransport


__all__ = [
    "ASGITransportBase",
    "BaseTransport",
    "SSETransport",
    "TransportFactory",
]
