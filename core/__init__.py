"""
Core aggregation logic for the Content Discovery MCP.

    Topic Catalog      Static query terms and site allowlists per topic
    Deduplication      First-seen-wins filter keyed on normalized URL
    Sampling           Uniform shuffle and preview site/query draws
    Metrics            Per-source call statistics
    Errors             Discovery error taxonomy

The fan-out engine lives in ``core.aggregator``; it depends on the
``api`` adapters and is imported from there directly.
"""

from core.catalog import (
    CATALOG,
    DEFAULT_TOPIC,
    available_topics,
    lookup,
    resolve_topic,
)
from core.dedup import (
    deduplicate_items,
    normalize_url,
)
from core.errors import (
    AllSourcesUnavailable,
    DiscoveryError,
    MalformedBackendResponse,
    SourceUnavailable,
    UnknownTopic,
)
from core.metrics import (
    AggregationMetrics,
    SourceMetrics,
    format_metrics_report,
    get_metrics,
)
from core.sampling import (
    sample_pair,
    shuffle_items,
)

__all__ = [
    # Catalog
    "CATALOG",
    "DEFAULT_TOPIC",
    "available_topics",
    "lookup",
    "resolve_topic",
    # Deduplication
    "deduplicate_items",
    "normalize_url",
    # Errors
    "AllSourcesUnavailable",
    "DiscoveryError",
    "MalformedBackendResponse",
    "SourceUnavailable",
    "UnknownTopic",
    # Metrics
    "AggregationMetrics",
    "SourceMetrics",
    "format_metrics_report",
    "get_metrics",
    # Sampling
    "sample_pair",
    "shuffle_items",
]
