# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Server-Sent Events transport adapter.

``GET /sse`` opens a long-lived event stream through the SDK's
``SseServerTransport`` (which sets the streaming headers and emits keep-alive
comment frames); client-to-server messages arrive on ``POST /messages``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mcp.server.sse import SseServerTransport
from mcp.server.transport_security import TransportSecuritySettings
from starlette.responses import JSONResponse
from starlette.routing import BaseRoute, Route

from ._asgi import ASGITransportBase
from ..sessions import SessionRegistry
from ...utils import get_logger


if TYPE_CHECKING:
    from starlette.types import Receive, Scope, Send

    from ..core import BraveSearchServer


@dataclass(slots=True)
class SSEConnectionHandler:
    """ASGI endpoint that runs one MCP session per event-stream connection."""

    server: BraveSearchServer
    transport: SseServerTransport
    sessions: SessionRegistry

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger = get_logger("bravemcp.transport.sse")
        try:
            async with self.transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
                with self.sessions.track() as session:
                    logger.debug("Server connected to transport", extra={"session_id": session.session_id})
                    await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
        except ValueError as exc:
            # connect_sse has already answered the request (e.g. host validation)
            logger.warning("SSE connection refused: %s", exc)


@dataclass(slots=True)
class MessageHandler:
    """ASGI endpoint forwarding client messages to the SDK transport."""

    transport: SseServerTransport
    sessions: SessionRegistry

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not self.sessions.has_active:
            get_logger("bravemcp.transport.sse").error("Message received but no active transport")
            response = JSONResponse({"error": "No active transport"}, status_code=400)
            await response(scope, receive, send)
            return
        await self.transport.handle_post_message(scope, receive, send)


class SSETransport(ASGITransportBase):
    """Serve a :class:`bravemcp.server.BraveSearchServer` over SSE."""

    TRANSPORT = ("sse", "SSE", "Server-Sent Events")

    SSE_PATH: str = "/sse"
    MESSAGE_PATH: str = "/messages"

    def __init__(
        self,
        server: BraveSearchServer,
        *,
        security_settings: TransportSecuritySettings | None = None,
        sse_path: str | None = None,
        message_path: str | None = None,
    ) -> None:
        super().__init__(server)
        self.sse_path = sse_path or self.SSE_PATH
        self.message_path = message_path or self.MESSAGE_PATH
        self._security_settings = security_settings
        self.sse = SseServerTransport(self.message_path, security_settings=security_settings)
        self.sessions = SessionRegistry(metrics=server.context.metrics)

    @property
    def security_settings(self) -> TransportSecuritySettings | None:
        return self._security_settings

    def _build_routes(self) -> Iterable[BaseRoute]:
        return [
            Route(
                self.sse_path,
                SSEConnectionHandler(server=self.server, transport=self.sse, sessions=self.sessions),
                methods=["GET"],
            ),
            Route(self.message_path, MessageHandler(transport=self.sse, sessions=self.sessions), methods=["POST"]),
        ]


__all__ = ["MessageHandler", "SSEConnectionHandler", "SSETransport"]
