"""
Fan-out aggregation.

Turns a topic entry into a batch of concurrent source calls and
merges the outcomes:

    normal     one web call per (site, query) pair plus one forum call,
               gathered, concatenated, deduplicated, shuffled
    preview    one web call for a randomly sampled site and query,
               returned as-is

In normal mode a failed call contributes no items; the request only
fails when every call failed. In preview mode the single call's
failure propagates unchanged.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Optional, Union

from api import hackernews, searxng
from core.dedup import deduplicate_items
from core.errors import AllSourcesUnavailable, SourceUnavailable
from core.metrics import AggregationMetrics, get_metrics
from core.sampling import sample_pair, shuffle_items
from models.config import DiscoverySettings, Mode, load_settings
from models.search import AggregationRequest, DiscoveryItem, TopicEntry

__all__ = [
    "FORUM_ITEM_LIMIT",
    "FanOutAggregator",
    "ScheduledCall",
    "aggregate",
]

logger = logging.getLogger(__name__)

FORUM_ITEM_LIMIT = 15
FORUM_SEARCH_TYPE = "story"

SearchFunc = Callable[..., Awaitable[list[DiscoveryItem]]]
CallOutcome = Union[list[DiscoveryItem], BaseException]


@dataclass(frozen=True)
class ScheduledCall:
    """One planned adapter invocation."""

    source: str
    label: str
    run: Callable[[], Awaitable[list[DiscoveryItem]]]


class FanOutAggregator:
    """Scatter-gather engine over the web and forum adapters."""

    def __init__(
        self,
        web_search: Optional[SearchFunc] = None,
        forum_search: Optional[SearchFunc] = None,
        *,
        settings: Optional[DiscoverySettings] = None,
        rng: Optional[random.Random] = None,
        metrics: Optional[AggregationMetrics] = None,
    ):
        self.web_search = web_search or searxng.search
        self.forum_search = forum_search or hackernews.search
        self.settings = settings or load_settings()
        self.rng = rng or random.Random()
        self.metrics = metrics or get_metrics()

    # ──────────────────────────────────────────────────────────────────────
    # Planning
    # ──────────────────────────────────────────────────────────────────────

    def web_call(self, site: str, query: str) -> ScheduledCall:
        return ScheduledCall(
            source=searxng.SOURCE_NAME,
            label=f"site:{site} {query}",
            run=partial(
                self.web_search,
                query,
                site=site,
                engines=self.settings.searxng_engines,
                pageno=1,
                language=self.settings.language,
                base_url=self.settings.searxng_url,
            ),
        )

    def forum_call(self, entry: TopicEntry) -> ScheduledCall:
        return ScheduledCall(
            source=hackernews.SOURCE_NAME,
            label=f"hn:{entry.forum_query}",
            run=partial(
                self.forum_search,
                entry.forum_query,
                search_type=FORUM_SEARCH_TYPE,
                max_results=self.settings.forum_item_limit,
            ),
        )

    def plan_normal(self, entry: TopicEntry) -> list[ScheduledCall]:
        """Web calls for sites x queries (site-major), then the forum call."""
        calls = [
            self.web_call(site, query)
            for site in entry.sites
            for query in entry.queries
        ]
        calls.append(self.forum_call(entry))
        return calls

    # ──────────────────────────────────────────────────────────────────────
    # Execution
    # ──────────────────────────────────────────────────────────────────────

    async def aggregate(
        self, entry: TopicEntry, mode: Mode = Mode.NORMAL
    ) -> list[DiscoveryItem]:
        if mode == Mode.PREVIEW:
            return await self.preview(entry)
        return await self.normal(entry)

    async def run(self, request: AggregationRequest) -> list[DiscoveryItem]:
        return await self.aggregate(request.entry, request.mode)

    async def preview(self, entry: TopicEntry) -> list[DiscoveryItem]:
        """Single sampled web call; its failure is the request's failure."""
        site, query = sample_pair(entry, self.rng)
        items = await self._execute(self.web_call(site, query))
        self.metrics.record_aggregation(Mode.PREVIEW.value)
        return list(items)

    async def normal(self, entry: TopicEntry) -> list[DiscoveryItem]:
        """Full fan-out with best-effort merge."""
        calls = self.plan_normal(entry)
        outcomes = await self._gather(calls)

        merged: list[DiscoveryItem] = []
        failures = 0
        for call, outcome in zip(calls, outcomes):
            if isinstance(outcome, BaseException):
                failures += 1
                logger.warning(f"{call.label} failed: {outcome}")
                continue
            merged.extend(outcome)

        if failures == len(calls):
            self.metrics.record_aggregate_failure()
            raise AllSourcesUnavailable(failures)

        unique = deduplicate_items(merged)
        self.metrics.record_aggregation(
            Mode.NORMAL.value, duplicates_removed=len(merged) - len(unique)
        )
        logger.debug(
            f"{entry.topic.value}: {len(calls) - failures}/{len(calls)} calls ok, "
            f"{len(unique)} unique items"
        )
        return shuffle_items(unique, self.rng)

    async def _gather(self, calls: list[ScheduledCall]) -> list[CallOutcome]:
        """Run every call concurrently; outcomes are returned in call order."""
        tasks = [asyncio.create_task(self._execute(call)) for call in calls]
        deadline = self.settings.aggregate_deadline

        try:
            _, pending = await asyncio.wait(tasks, timeout=deadline)
        except BaseException:
            # Caller was cancelled; no call may outlive the request.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        if pending:
            logger.warning(
                f"Aggregation deadline {deadline}s hit, abandoning {len(pending)} calls"
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        outcomes: list[CallOutcome] = []
        for call, task in zip(calls, tasks):
            if task.cancelled():
                error = SourceUnavailable(call.source, "aggregation deadline exceeded")
                self.metrics.record_call(call.source, 0.0, error=error)
                outcomes.append(error)
            elif task.exception() is not None:
                outcomes.append(task.exception())
            else:
                outcomes.append(task.result())
        return outcomes

    async def _execute(self, call: ScheduledCall) -> list[DiscoveryItem]:
        """Run one call under the per-call timeout, recording metrics."""
        timeout = self.settings.source_timeout
        started = time.perf_counter()
        try:
            if timeout:
                items = await asyncio.wait_for(call.run(), timeout)
            else:
                items = await call.run()
        except asyncio.TimeoutError as e:
            self.metrics.record_call(call.source, 0.0, error=e)
            raise SourceUnavailable(call.source, f"timed out after {timeout}s") from e
        except Exception as e:
            self.metrics.record_call(call.source, 0.0, error=e)
            raise

        latency_ms = (time.perf_counter() - started) * 1000
        self.metrics.record_call(call.source, latency_ms, item_count=len(items))
        return items


# ══════════════════════════════════════════════════════════════════════════════
# Module-level convenience
# ══════════════════════════════════════════════════════════════════════════════

_default_aggregator: Optional[FanOutAggregator] = None


def get_aggregator() -> FanOutAggregator:
    """Get or create the process-wide aggregator over the live adapters."""
    global _default_aggregator
    if _default_aggregator is None:
        _default_aggregator = FanOutAggregator()
    return _default_aggregator


async def aggregate(entry: TopicEntry, mode: Mode = Mode.NORMAL) -> list[DiscoveryItem]:
    return await get_aggregator().aggregate(entry, mode)
