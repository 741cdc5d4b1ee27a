# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from bravemcp.server.authorization import AuthorizationConfig, AuthorizationManager


@pytest.fixture
def auth_config() -> AuthorizationConfig:
    return AuthorizationConfig(secret="shared-secret")


@pytest.fixture
def manager(auth_config: AuthorizationConfig) -> AuthorizationManager:
    return AuthorizationManager(auth_config)


def _guarded_app(manager: AuthorizationManager) -> TestClient:
    async def ok(_request):
        return JSONResponse({"ok": True})

    app = Starlette(routes=[Route("/sse", ok), Route("/health", ok)])
    return TestClient(manager.wrap_asgi(app))


def test_config_disabled_without_secret() -> None:
    assert AuthorizationConfig().enabled is False
    assert AuthorizationConfig(secret="").enabled is False
    assert AuthorizationConfig(secret="x").enabled is True


def test_accepts_only_the_exact_secret(manager: AuthorizationManager) -> None:
    assert manager.accepts("shared-secret")
    assert not manager.accepts("shared-secre")
    assert not manager.accepts("")
    assert not manager.accepts(None)


def test_disabled_manager_accepts_anything() -> None:
    manager = AuthorizationManager(AuthorizationConfig())
    assert manager.accepts(None)


def test_middleware_allows_valid_secret(manager: AuthorizationManager) -> None:
    client = _guarded_app(manager)

    resp = client.get("/sse", params={"auth": "shared-secret"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_middleware_rejects_missing_secret(manager: AuthorizationManager) -> None:
    client = _guarded_app(manager)

    resp = client.get("/sse")

    assert resp.status_code == 403
    assert resp.json() == {"error": "Forbidden: Invalid auth token."}


def test_middleware_leaves_unprotected_paths_alone(manager: AuthorizationManager) -> None:
    client = _guarded_app(manager)

    assert client.get("/health").status_code == 200


def test_custom_query_param_and_paths() -> None:
    manager = AuthorizationManager(AuthorizationConfig(secret="k", query_param="token", protected_paths=("/health",)))
    client = _guarded_app(manager)

    assert client.get("/sse").status_code == 200
    assert client.get("/health", params={"auth": "k"}).status_code == 403
    assert client.get("/health", params={"token": "k"}).status_code == 200
