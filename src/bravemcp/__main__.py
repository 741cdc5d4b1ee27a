# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Command-line entry point: ``brave-search-mcp`` / ``python -m bravemcp``."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import sys

import anyio
from dotenv import load_dotenv

from .config import ConfigurationError, Settings
from .context import SearchContext
from .server import BraveSearchServer
from .tools import register_search_tools
from .utils import get_logger, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="brave-search-mcp", description="Run the Brave Search MCP server over SSE")
    parser.add_argument("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (default: $PORT or 8080)")
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or INFO)")
    parser.add_argument("--log-json", action="store_true", default=None, help="Emit structured JSON logs")
    return parser


def build_server(settings: Settings) -> BraveSearchServer:
    """Create a server with both search tools registered."""
    context = SearchContext.from_settings(settings)
    server = BraveSearchServer(context)
    register_search_tools(server)
    return server


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    load_dotenv()
    setup_logger(level=args.log_level, use_json=args.log_json)
    logger = get_logger("bravemcp")

    try:
        settings = Settings.from_env(load_env_file=False)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    settings = settings.with_overrides(
        host=args.host, port=args.port, log_level=args.log_level, log_json=args.log_json
    )
    setup_logger(level=settings.log_level, use_json=settings.log_json, force=True)

    server = build_server(settings)
    uvicorn_log_level = (settings.log_level or "info").lower()

    try:
        anyio.run(lambda: server.serve_sse(host=settings.host, port=settings.port, log_level=uvicorn_log_level))
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
