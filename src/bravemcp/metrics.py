# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Prometheus instrumentation.

Each :class:`SearchMetrics` owns its own ``CollectorRegistry`` so that two
servers in the same process (or two tests) never share counters.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Gauge,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)


class SearchMetrics:
    """Search, connection and rate-limit metrics for one server instance."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None, *, process_metrics: bool = True) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        if process_metrics:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        self.search_requests = Counter(
            "brave_search_requests_total",
            "Total number of search requests",
            ["type"],
            registry=self.registry,
        )
        self.search_response_time = Histogram(
            "brave_search_response_time_seconds",
            "Response time in seconds",
            ["type"],
            buckets=(0.1, 0.5, 1, 2, 5),
            registry=self.registry,
        )
        self.search_errors = Counter(
            "brave_search_errors_total",
            "Total number of search errors",
            ["type", "error"],
            registry=self.registry,
        )
        self.active_connections = Gauge(
            "brave_search_active_connections",
            "Number of active SSE connections",
            registry=self.registry,
        )
        self.connection_duration = Histogram(
            "brave_search_connection_duration_seconds",
            "Duration of SSE connections in seconds",
            buckets=(60, 300, 600, 1800, 3600),
            registry=self.registry,
        )
        self.rate_limit_usage = Gauge(
            "brave_search_rate_limit_usage",
            "Current rate limit usage",
            ["period"],
            registry=self.registry,
        )
        self.rate_limit_hits = Counter(
            "brave_search_rate_limit_hits_total",
            "Number of rate limit hits",
            ["period"],
            registry=self.registry,
        )

    @contextmanager
    def track_search(self, search_type: str) -> Iterator[None]:
        """Count a search and time it; failures are counted by exception class."""
        self.search_requests.labels(type=search_type).inc()
        start = time.perf_counter()
        try:
            yield
        except Exception as exc:
            self.search_errors.labels(type=search_type, error=type(exc).__name__).inc()
            raise
        finally:
            self.search_response_time.labels(type=search_type).observe(time.perf_counter() - start)

    def connection_opened(self) -> None:
        self.active_connections.inc()

    def connection_closed(self, duration: float) -> None:
        self.active_connections.dec()
        self.connection_duration.observe(duration)

    def render(self) -> bytes:
        """Return the text exposition of every collector in the registry."""
        return generate_latest(self.registry)


__all__ = ["SearchMetrics"]
