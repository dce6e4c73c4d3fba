from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest

from teamprov.adapters.graph import open_session
from teamprov.adapters.http_resilience import ResilientClient
from teamprov.config import GraphConfig, ResilienceConfig, RetryPolicy
from tests.support.graph import BASE_URL, FakeGraph

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from teamprov.adapters.graph import GraphSession
    from tests.support.graph import GraphRunner

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def graph_config() -> GraphConfig:
    resilience = ResilienceConfig(
        name="graph-test",
        base_url=BASE_URL,
        timeout_seconds=5.0,
        retry=RetryPolicy(total=0),
    )
    return GraphConfig(access_token="test-token", resilience=resilience)


@pytest.fixture
def fake_graph() -> FakeGraph:
    return FakeGraph()


@pytest.fixture
def client_factory(fake_graph: FakeGraph) -> Callable[[ResilienceConfig], ResilientClient]:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(fake_graph))

    return factory


@pytest.fixture
def run_graph(
    graph_config: GraphConfig,
    client_factory: Callable[[ResilienceConfig], ResilientClient],
) -> GraphRunner:
    """Run ``operation(session)`` against the fake Graph endpoint."""

    def run[T](operation: Callable[[GraphSession], Awaitable[T]]) -> T:
        async def runner() -> T:
            async with open_session(graph_config, client_factory=client_factory) as session:
                return await operation(session)

        return asyncio.run(runner())

    return run


@pytest.fixture
def template_path() -> Path:
    return DATA_DIR / "teams_template.json"
