from collections.abc import Iterator

import pytest

from bravemcp.config import RateLimitConfig, Settings
from bravemcp.context import SearchContext
from bravemcp.metrics import SearchMetrics
from bravemcp.server import BraveSearchServer
from bravemcp.tools import register_search_tools
from tests.helpers import FakeBraveAPI


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    # generous ceilings so a full local search (three upstream calls) fits one second
    return Settings(api_key="test-key", rate_limit=RateLimitConfig(per_second=100, per_month=1000))


@pytest.fixture
def fake_api() -> FakeBraveAPI:
    return FakeBraveAPI()


@pytest.fixture
def metrics() -> SearchMetrics:
    return SearchMetrics(process_metrics=False)


@pytest.fixture
def context(settings: Settings, fake_api: FakeBraveAPI, metrics: SearchMetrics) -> SearchContext:
    return SearchContext.from_settings(settings, http_client=fake_api.client(), metrics=metrics)


@pytest.fixture
def server(context: SearchContext) -> Iterator[BraveSearchServer]:
    server = BraveSearchServer(context)
    register_search_tools(server)
    yield server
