# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Fixed-window rate limiting for upstream Brave API calls.

The per-second window is reset lazily on the first check after more than one
second has elapsed, so a burst straddling the boundary can admit slightly more
than the nominal ceiling.  The monthly window follows the UTC calendar month.
Counters live in memory only; a restart starts from zero.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
import time
from typing import TYPE_CHECKING, Literal


if TYPE_CHECKING:
    from .metrics import SearchMetrics

Period = Literal["second", "month"]

_WINDOW_SECONDS = 1.0


class RateLimitExceeded(Exception):
    """Raised when a per-second or per-month ceiling has been reached."""

    def __init__(self, period: Period) -> None:
        super().__init__("Rate limit exceeded")
        self.period = period


@dataclass(slots=True)
class RateCounter:
    """Mutable counter state for one limiter."""

    second_count: int = 0
    month_count: int = 0
    last_reset: float = 0.0
    month_key: tuple[int, int] = (0, 0)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """Admit or reject upstream calls against per-second and per-month ceilings."""

    def __init__(
        self,
        per_second: int = 1,
        per_month: int = 15000,
        *,
        clock: Callable[[], float] = time.monotonic,
        calendar: Callable[[], datetime] = _utc_now,
        metrics: SearchMetrics | None = None,
    ) -> None:
        if per_second < 1 or per_month < 1:
            raise ValueError("rate limit ceilings must be positive")
        self.per_second = per_second
        self.per_month = per_month
        self._clock = clock
        self._calendar = calendar
        self._metrics = metrics
        self._counter = RateCounter(last_reset=clock(), month_key=self._current_month())

    def check(self) -> None:
        """Record one upstream call or raise :class:`RateLimitExceeded`."""
        self._roll_windows()

        counter = self._counter
        if counter.second_count >= self.per_second:
            self._reject("second")
        if counter.month_count >= self.per_month:
            self._reject("month")

        counter.second_count += 1
        counter.month_count += 1
        if self._metrics is not None:
            self._metrics.rate_limit_usage.labels(period="second").set(counter.second_count)
            self._metrics.rate_limit_usage.labels(period="month").set(counter.month_count)

    def snapshot(self) -> RateCounter:
        """Return a copy of the current counters."""
        counter = self._counter
        return RateCounter(counter.second_count, counter.month_count, counter.last_reset, counter.month_key)

    def _roll_windows(self) -> None:
        counter = self._counter
        now = self._clock()
        if now - counter.last_reset > _WINDOW_SECONDS:
            counter.second_count = 0
            counter.last_reset = now

        month_key = self._current_month()
        if month_key != counter.month_key:
            counter.month_count = 0
            counter.month_key = month_key

    def _current_month(self) -> tuple[int, int]:
        today = self._calendar()
        return (today.year, today.month)

    def _reject(self, period: Period) -> None:
        if self._metrics is not None:
            self._metrics.rate_limit_hits.labels(period=period).inc()
        raise RateLimitExceeded(period)


__all__ = ["RateCounter", "RateLimitExceeded", "RateLimiter"]
