# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Public server-side surface.

The heavy lifting lives in :mod:`bravemcp.server.core`; this module re-exports
the primitives that host applications are expected to import.
"""

from __future__ import annotations

from .authorization import AuthorizationConfig, AuthorizationManager
from .core import BraveSearchServer
from .sessions import SessionRegistry, SessionState, SSESession


__all__ = [
    "AuthorizationConfig",
    "AuthorizationManager",
    "BraveSearchServer",
    "SSESession",
    "SessionRegistry",
    "SessionState",
]
