# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Shared-secret guard for the SSE endpoint.

When ``MCP_SSE_SECRET`` is configured, clients must open the event stream with
``GET /sse?auth=<secret>``.  Anything else is answered with ``403`` before the
MCP transport sees the request.

Key pieces:

* :class:`AuthorizationConfig` – opt-in configuration.
* :class:`AuthorizationManager` – checks the secret and wraps ASGI apps.
"""

from __future__ import annotations

from dataclasses import dataclass
import hmac
from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import JSONResponse

from ..utils import get_logger


if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


@dataclass(slots=True)
class AuthorizationConfig:
    """Server-side shared-secret configuration."""

    secret: str | None = None
    query_param: str = "auth"
    protected_paths: tuple[str, ...] = ("/sse",)

    @property
    def enabled(self) -> bool:
        return bool(self.secret)


class AuthorizationManager:
    """Validates the shared secret and provides the ASGI middleware."""

    def __init__(self, config: AuthorizationConfig) -> None:
        self.config = config
        self._logger = get_logger("bravemcp.authorization")

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def is_protected(self, path: str) -> bool:
        return path in self.config.protected_paths

    def accepts(self, token: str | None) -> bool:
        if not self.enabled:
            return True
        if token is None:
            return False
        return hmac.compare_digest(token.encode(), (self.config.secret or "").encode())

    def wrap_asgi(self, app: ASGIApp) -> ASGIApp:
        return _SharedSecretMiddleware(app, self)

    def forbidden_response(self) -> JSONResponse:
        return JSONResponse({"error": "Forbidden: Invalid auth token."}, status_code=403)


class _SharedSecretMiddleware:
    """Pure ASGI middleware so streaming responses pass through untouched."""

    def __init__(self, app: ASGIApp, manager: AuthorizationManager) -> None:
        self.app = app
        self.manager = manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self.manager.is_protected(scope["path"]):
            request = Request(scope)
            token = request.query_params.get(self.manager.config.query_param)
            if not self.manager.accepts(token):
                self.manager._logger.warning(
                    "SSE connection rejected",
                    extra={"context": {"reason": "invalid shared secret", "client": _client_host(request)}},
                )
                response = self.manager.forbidden_response()
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)


def _client_host(request: Request) -> str | None:
    return request.client.host if request.client else None


__all__ = ["AuthorizationConfig", "AuthorizationManager"]
