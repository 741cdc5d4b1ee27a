# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Brave Search MCP server built on the reference SDK's low-level ``Server``."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from mcp import types
from mcp.server.lowlevel.server import Server
from mcp.server.lowlevel.server import lifespan as default_lifespan
from mcp.server.transport_security import TransportSecuritySettings
from mcp.shared.exceptions import McpError

from .authorization import AuthorizationConfig, AuthorizationManager
from .services import ToolsService
from .transports import BaseTransport, SSETransport, TransportFactory
from ..config import SERVER_NAME, SERVER_VERSION, Settings
from ..context import SearchContext
from ..tool import ToolSpec
from ..tool import reset_active_server as reset_tool_server
from ..tool import set_active_server as set_tool_server
from ..utils import get_logger


class BraveSearchServer(Server[Any, Any]):
    """MCP server exposing Brave Search tools over SSE."""

    def __init__(
        self,
        context: SearchContext,
        *,
        name: str = SERVER_NAME,
        version: str | None = SERVER_VERSION,
        instructions: str | None = None,
        lifespan: Callable[[Server[Any, Any]], Any] = default_lifespan,
        transport: str | None = None,
        http_security: TransportSecuritySettings | None = None,
        authorization: AuthorizationConfig | None = None,
    ) -> None:
        super().__init__(name, version=version, instructions=instructions, lifespan=lifespan)
        self.context = context
        self._default_transport = transport.lower() if transport else "sse"
        self._logger = get_logger("bravemcp.server")

        self.tools: ToolsService = ToolsService(logger=self._logger)

        self._http_security_settings = (
            http_security if http_security is not None else self._default_http_security_settings()
        )

        if authorization is None:
            authorization = AuthorizationConfig(secret=context.settings.sse_secret)
        self._authorization_manager: AuthorizationManager | None = None
        if authorization.enabled:
            self._authorization_manager = AuthorizationManager(authorization)

        self._transport_factories: dict[str, TransportFactory] = {}
        sse_factory = lambda server: SSETransport(server, security_settings=self._http_security_settings)
        self.register_transport("sse", sse_factory)

        # //////////////////////////////////////////////////////////////////
        # Register protocol handlers
        # //////////////////////////////////////////////////////////////////

        @self.list_tools()
        async def _list_tools() -> list[types.Tool]:
            result = await self.tools.list_tools()
            return list(result.tools)

        @self.call_tool(validate_input=False)
        async def _call_tool(
            name: str, arguments: dict[str, Any] | None
        ) -> tuple[list[types.ContentBlock], dict[str, Any] | None]:
            result = await self.tools.call_tool(name, arguments)
            if result.isError:
                message = "Tool execution failed"
                if result.content:
                    first = result.content[0]
                    if isinstance(first, types.TextContent) and first.text:
                        message = first.text
                # mcp 1.10 handlers cannot return a CallToolResult; the SDK turns this
                # exception into an isError result carrying the same text
                raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=message))

            return list(result.content), result.structuredContent

    # //////////////////////////////////////////////////////////////////
    # Public API
    # //////////////////////////////////////////////////////////////////

    @property
    def tool_names(self) -> list[str]:
        return self.tools.tool_names

    @property
    def settings(self) -> Settings:
        return self.context.settings

    @property
    def authorization_manager(self) -> AuthorizationManager | None:
        return self._authorization_manager

    def register_tool(self, target: ToolSpec | Callable[..., Any]) -> ToolSpec:
        return self.tools.register(target)

    async def invoke_tool(self, name: str, arguments: Any = None) -> types.CallToolResult:
        """Dispatch a tool call in-process, bypassing the transport."""
        return await self.tools.call_tool(name, arguments)

    @contextmanager
    def binding(self) -> Iterator[BraveSearchServer]:
        token = set_tool_server(self)
        try:
            yield self
        finally:
            reset_tool_server(token)

    # //////////////////////////////////////////////////////////////////
    # Transport registry
    # //////////////////////////////////////////////////////////////////

    def _default_http_security_settings(self) -> TransportSecuritySettings:
        """DNS-rebinding guard; opt-in because public deployments sit behind proxies."""
        settings = self.context.settings
        if not settings.dns_rebinding_protection:
            return TransportSecuritySettings(enable_dns_rebinding_protection=False)

        allowed_hosts = ["127.0.0.1:*", "localhost:*"]
        if settings.public_host and settings.public_host not in allowed_hosts:
            allowed_hosts.append(settings.public_host)
        return TransportSecuritySettings(
            enable_dns_rebinding_protection=True,
            allowed_hosts=allowed_hosts,
            allowed_origins=[settings.resolved_public_url],
        )

    def register_transport(self, name: str, factory: TransportFactory) -> None:
        self._transport_factories[name.lower()] = factory

    def create_transport(self, name: str | None = None) -> BaseTransport:
        selected = (name or self._default_transport).lower()
        factory = self._transport_factories.get(selected)
        if factory is None:
            raise ValueError(f"Unsupported transport '{selected}'.")
        transport = factory(self)
        if not isinstance(transport, BaseTransport):
            raise TypeError("Transport factory must return a BaseTransport instance")
        return transport

    # //////////////////////////////////////////////////////////////////
    # Transport helpers
    # //////////////////////////////////////////////////////////////////

    async def serve(self, *, transport: str | None = None, **kwargs: Any) -> None:
        await self.create_transport(transport).run(**kwargs)

    async def serve_sse(
        self,
        host: str | None = None,
        port: int | None = None,
        log_level: str = "info",
        **uvicorn_options: Any,
    ) -> None:
        settings = self.context.settings
        host = host or settings.host
        port = port or settings.port

        self._logger.info("Starting Brave Search MCP Server v%s (%s)", self.version, self.name)
        self._logger.info("Registered tools: %s", ", ".join(self.tool_names))
        self._logger.info("Brave Search MCP Server running at http://%s:%s", host, port)
        self._logger.info("Connect to SSE endpoint at %s/sse", settings.resolved_public_url)
        if self._authorization_manager is not None:
            self._logger.info("SSE shared-secret authentication enabled")

        await self.serve(transport="sse", host=host, port=port, log_level=log_level, **uvicorn_options)


__all__ = ["BraveSearchServer"]
