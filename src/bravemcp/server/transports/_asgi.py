# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Shared ASGI transport primitives.

Concrete subclasses supply the MCP routes; this base class adds the stateless
``/health`` and ``/metrics`` endpoints, applies the optional shared-secret
guard, and runs the resulting Starlette app under uvicorn.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import BaseRoute, Route
from uvicorn import Config, Server

from .base import BaseTransport


if TYPE_CHECKING:
    from starlette.types import ASGIApp

    from ..authorization import AuthorizationManager


class ASGITransportBase(BaseTransport, ABC):
    """Template for transports that present a :class:`BraveSearchServer` via ASGI."""

    DEFAULT_HOST: str = "0.0.0.0"
    DEFAULT_PORT: int = 8080
    DEFAULT_LOG_LEVEL: str = "info"
    HEALTH_PATH: str = "/health"
    METRICS_PATH: str = "/metrics"

    async def run(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
        **uvicorn_options: Any,
    ) -> None:
        host = host or self.DEFAULT_HOST
        port = port or self.DEFAULT_PORT
        log_level = log_level or self.DEFAULT_LOG_LEVEL

        config = Config(app=self.build_app(), host=host, port=port, log_level=log_level, **uvicorn_options)
        server_instance = Server(config)
        await server_instance.serve()

    def build_app(self) -> ASGIApp:
        """Assemble the Starlette app, wrapped by the shared-secret guard if enabled."""
        routes = [*self._build_routes(), *self._build_common_routes()]
        app: ASGIApp = Starlette(routes=routes, lifespan=self._lifespan)

        authorization: AuthorizationManager | None = self.server.authorization_manager
        if authorization is not None and authorization.enabled:
            app = authorization.wrap_asgi(app)
        return app

    def _build_common_routes(self) -> list[Route]:
        metrics = self.server.context.metrics

        async def health(_request: Request) -> Response:
            return JSONResponse({"status": "ok"})

        async def metrics_endpoint(_request: Request) -> Response:
            return Response(metrics.render(), media_type=metrics.content_type)

        return [
            Route(self.HEALTH_PATH, health, methods=["GET"]),
            Route(self.METRICS_PATH, metrics_endpoint, methods=["GET"]),
        ]

    @asynccontextmanager
    async def _lifespan(self, _app: Starlette) -> AsyncIterator[None]:  # pragma: no cover - exercised via uvicorn
        try:
            yield
        finally:
            await self.server.context.aclose()

    @abstractmethod
    def _build_routes(self) -> Iterable[BaseRoute]: ...


__all__ = ["ASGITransportBase"]
