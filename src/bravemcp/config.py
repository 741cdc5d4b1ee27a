# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Runtime configuration sourced from the environment.

``Settings.from_env`` is the single place that reads environment variables.
A ``.env`` file in the working directory is honoured through ``python-dotenv``
before the process environment is consulted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
import os
from typing import Any, Final
from urllib.parse import urlsplit

from dotenv import load_dotenv


SERVER_NAME: Final[str] = "example-servers/brave-search"
SERVER_VERSION: Final[str] = "0.1.0"

WEB_SEARCH_URL: Final[str] = "https://api.search.brave.com/res/v1/web/search"
POIS_URL: Final[str] = "https://api.search.brave.com/res/v1/local/pois"
DESCRIPTIONS_URL: Final[str] = "https://api.search.brave.com/res/v1/local/descriptions"

DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_PORT: Final[int] = 8080
DEFAULT_RATE_LIMIT_PER_SECOND: Final[int] = 1
DEFAULT_RATE_LIMIT_PER_MONTH: Final[int] = 15000


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


@dataclass(slots=True)
class RateLimitConfig:
    """Ceilings for the fixed-window upstream rate limiter."""

    per_second: int = DEFAULT_RATE_LIMIT_PER_SECOND
    per_month: int = DEFAULT_RATE_LIMIT_PER_MONTH


@dataclass(slots=True)
class Settings:
    """Server settings.

    Only ``api_key`` is mandatory; everything else has a sensible default for a
    single-instance deployment.
    """

    api_key: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    public_url: str | None = None
    log_level: str | None = None
    log_json: bool = False
    sse_secret: str | None = None
    http_timeout: float | None = None
    dns_rebinding_protection: bool = False
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    web_search_url: str = WEB_SEARCH_URL
    pois_url: str = POIS_URL
    descriptions_url: str = DESCRIPTIONS_URL

    @property
    def resolved_public_url(self) -> str:
        """Return the externally visible base URL without a trailing slash."""
        return (self.public_url or f"http://localhost:{self.port}").rstrip("/")

    @property
    def public_host(self) -> str | None:
        return urlsplit(self.resolved_public_url).netloc or None

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with non-``None`` overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, load_env_file: bool = True) -> Settings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigurationError: If ``BRAVE_API_KEY`` is absent or a numeric
                variable cannot be parsed.
        """
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        api_key = (environ.get("BRAVE_API_KEY") or "").strip()
        if not api_key:
            raise ConfigurationError("Missing required environment variable: BRAVE_API_KEY")

        return cls(
            api_key=api_key,
            host=environ.get("HOST") or DEFAULT_HOST,
            port=_read_int(environ, "PORT", DEFAULT_PORT),
            public_url=environ.get("PUBLIC_URL") or None,
            log_level=environ.get("BRAVE_MCP_LOG_LEVEL") or environ.get("LOG_LEVEL") or None,
            log_json=_read_bool(environ, "BRAVE_MCP_LOG_JSON"),
            sse_secret=environ.get("MCP_SSE_SECRET") or None,
            http_timeout=_read_float(environ, "BRAVE_HTTP_TIMEOUT"),
            dns_rebinding_protection=_read_bool(environ, "BRAVE_MCP_DNS_REBINDING_PROTECTION"),
            rate_limit=RateLimitConfig(
                per_second=_read_int(environ, "BRAVE_RATE_LIMIT_PER_SECOND", DEFAULT_RATE_LIMIT_PER_SECOND),
                per_month=_read_int(environ, "BRAVE_RATE_LIMIT_PER_MONTH", DEFAULT_RATE_LIMIT_PER_MONTH),
            ),
        )


def _read_bool(environ: Mapping[str, str], key: str) -> bool:
    value = environ.get(key)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer (got {raw!r})") from exc


def _read_float(environ: Mapping[str, str], key: str) -> float | None:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number (got {raw!r})") from exc


__all__ = [
    "ConfigurationError",
    "RateLimitConfig",
    "Settings",
    "SERVER_NAME",
    "SERVER_VERSION",
]
