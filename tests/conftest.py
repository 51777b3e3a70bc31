"""Shared fixtures for the Content Discovery test suite.

Async tests run through pytest-asyncio (``asyncio_mode = "auto"`` in
pyproject.toml). Adapter fakes record every call so tests can assert on
the fan-out plan without touching the network.
"""

from __future__ import annotations

import random
from typing import Any, Callable, Optional

import pytest

from core.metrics import AggregationMetrics
from models import DiscoverySettings, DiscoveryItem, Topic, TopicEntry


def make_item(url: str, title: Optional[str] = None, **fields: Any) -> DiscoveryItem:
    return DiscoveryItem(url=url, title=title or f"Title for {url}", **fields)


class FakeSearch:
    """Async search stand-in keyed on (site, query)."""

    def __init__(
        self,
        results: Optional[dict[tuple[Optional[str], str], list[DiscoveryItem]]] = None,
        failures: Optional[dict[tuple[Optional[str], str], Exception]] = None,
        default: Optional[Callable[[Optional[str], str], list[DiscoveryItem]]] = None,
    ):
        self.results = results or {}
        self.failures = failures or {}
        self.default = default
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, query: str, *, site: Optional[str] = None, **options: Any):
        self.calls.append({"query": query, "site": site, **options})
        key = (site, query)
        if key in self.failures:
            raise self.failures[key]
        if key in self.results:
            return list(self.results[key])
        if self.default is not None:
            return self.default(site, query)
        return []


@pytest.fixture
def settings() -> DiscoverySettings:
    return DiscoverySettings(
        searxng_url="http://searx.test",
        source_timeout=5.0,
        aggregate_deadline=None,
    )


@pytest.fixture
def metrics() -> AggregationMetrics:
    return AggregationMetrics()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def small_entry() -> TopicEntry:
    return TopicEntry(
        topic=Topic.AI,
        queries=("q1", "q2"),
        sites=("a.com", "b.com"),
        forum_phrase="ai phrase",
    )
