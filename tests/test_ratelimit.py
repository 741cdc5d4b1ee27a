# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

from __future__ import annotations

import pytest

from bravemcp.metrics import SearchMetrics
from bravemcp.ratelimit import RateLimiter, RateLimitExceeded
from tests.helpers import FakeCalendar, FakeClock


def test_second_ceiling_rejects_extra_calls() -> None:
    clock = FakeClock()
    limiter = RateLimiter(per_second=2, per_month=100, clock=clock)

    limiter.check()
    limiter.check()
    with pytest.raises(RateLimitExceeded) as excinfo:
        limiter.check()

    assert str(excinfo.value) == "Rate limit exceeded"
    assert excinfo.value.period == "second"


def test_rejected_call_does_not_count() -> None:
    limiter = RateLimiter(per_second=1, per_month=100, clock=FakeClock())

    limiter.check()
    with pytest.raises(RateLimitExceeded):
        limiter.check()

    snapshot = limiter.snapshot()
    assert snapshot.second_count == 1
    assert snapshot.month_count == 1


def test_second_window_resets_only_after_a_full_second() -> None:
    clock = FakeClock()
    limiter = RateLimiter(per_second=1, per_month=100, clock=clock)
    limiter.check()

    clock.advance(1.0)
    with pytest.raises(RateLimitExceeded):
        limiter.check()

    clock.advance(0.001)
    limiter.check()
    assert limiter.snapshot().second_count == 1


def test_month_ceiling_survives_second_resets() -> None:
    clock = FakeClock()
    limiter = RateLimiter(per_second=10, per_month=2, clock=clock, calendar=FakeCalendar())

    limiter.check()
    clock.advance(5)
    limiter.check()
    clock.advance(5)

    with pytest.raises(RateLimitExceeded) as excinfo:
        limiter.check()
    assert excinfo.value.period == "month"


def test_month_window_rolls_with_the_calendar() -> None:
    calendar = FakeCalendar(2025, 1)
    clock = FakeClock()
    limiter = RateLimiter(per_second=10, per_month=1, clock=clock, calendar=calendar)

    limiter.check()
    with pytest.raises(RateLimitExceeded):
        limiter.check()

    calendar.move_to(2025, 2)
    limiter.check()

    snapshot = limiter.snapshot()
    assert snapshot.month_key == (2025, 2)
    assert snapshot.month_count == 1


def test_snapshot_is_a_copy() -> None:
    limiter = RateLimiter(per_second=5, per_month=5, clock=FakeClock())
    snapshot = limiter.snapshot()

    limiter.check()

    assert snapshot.second_count == 0
    assert limiter.snapshot().second_count == 1


@pytest.mark.parametrize(("per_second", "per_month"), [(0, 10), (1, 0), (-1, -1)])
def test_non_positive_ceilings_are_rejected(per_second: int, per_month: int) -> None:
    with pytest.raises(ValueError):
        RateLimiter(per_second=per_second, per_month=per_month)


def test_limiter_reports_usage_and_hits() -> None:
    metrics = SearchMetrics(process_metrics=False)
    limiter = RateLimiter(per_second=1, per_month=100, clock=FakeClock(), metrics=metrics)

    limiter.check()
    with pytest.raises(RateLimitExceeded):
        limiter.check()

    registry = metrics.registry
    assert registry.get_sample_value("brave_search_rate_limit_usage", {"period": "second"}) == 1.0
    assert registry.get_sample_value("brave_search_rate_limit_usage", {"period": "month"}) == 1.0
    assert registry.get_sample_value("brave_search_rate_limit_hits_total", {"period": "second"}) == 1.0
