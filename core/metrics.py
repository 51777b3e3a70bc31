"""
Source call metrics.

Track per-source adapter call outcomes, item counts and latency
for the lifetime of the process. Nothing is persisted.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional

__all__ = [
    "SourceMetrics",
    "AggregationMetrics",
    "get_metrics",
    "format_metrics_report",
]

# ══════════════════════════════════════════════════════════════════════════════
# Metrics Classes
# ══════════════════════════════════════════════════════════════════════════════


@dataclass
class SourceMetrics:
    """Track call statistics for one source."""

    total_calls: int = 0
    successful_calls: int = 0
    failed_calls: int = 0
    total_items: int = 0
    total_latency_ms: float = 0.0
    error_types: dict[str, int] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if self.total_calls == 0:
            return 0.0
        return (self.successful_calls / self.total_calls) * 100

    @property
    def avg_latency_ms(self) -> float:
        if self.successful_calls == 0:
            return 0.0
        return self.total_latency_ms / self.successful_calls

    def record_success(self, latency_ms: float, item_count: int):
        self.total_calls += 1
        self.successful_calls += 1
        self.total_items += item_count
        self.total_latency_ms += latency_ms

    def record_failure(self, error_type: str):
        self.total_calls += 1
        self.failed_calls += 1
        self.error_types[error_type] = self.error_types.get(error_type, 0) + 1


@dataclass
class AggregationMetrics:
    """Process-wide registry of per-source metrics and aggregation counts."""

    start_time: float = field(default_factory=time.time)
    sources: dict[str, SourceMetrics] = field(default_factory=dict)
    aggregations: dict[str, int] = field(default_factory=dict)
    aggregate_failures: int = 0
    duplicates_removed: int = 0

    def source(self, name: str) -> SourceMetrics:
        if name not in self.sources:
            self.sources[name] = SourceMetrics()
        return self.sources[name]

    def record_call(
        self,
        name: str,
        latency_ms: float,
        item_count: int = 0,
        error: Optional[BaseException] = None,
    ):
        if error is None:
            self.source(name).record_success(latency_ms, item_count)
        else:
            self.source(name).record_failure(type(error).__name__)

    def record_aggregation(self, mode: str, duplicates_removed: int = 0):
        self.aggregations[mode] = self.aggregations.get(mode, 0) + 1
        self.duplicates_removed += duplicates_removed

    def record_aggregate_failure(self):
        self.aggregate_failures += 1

    @property
    def uptime_seconds(self) -> float:
        return time.time() - self.start_time

    def summary(self) -> dict[str, Any]:
        return {
            "uptime_seconds": round(self.uptime_seconds, 1),
            "aggregations": dict(self.aggregations),
            "aggregate_failures": self.aggregate_failures,
            "duplicates_removed": self.duplicates_removed,
            "sources": {
                name: {
                    "calls": m.total_calls,
                    "success_rate": round(m.success_rate, 1),
                    "items": m.total_items,
                    "avg_latency_ms": round(m.avg_latency_ms, 0),
                }
                for name, m in self.sources.items()
            },
        }

    def reset(self):
        self.start_time = time.time()
        self.sources.clear()
        self.aggregations.clear()
        self.aggregate_failures = 0
        self.duplicates_removed = 0


# ══════════════════════════════════════════════════════════════════════════════
# Global Instance
# ══════════════════════════════════════════════════════════════════════════════

_metrics = AggregationMetrics()


def get_metrics() -> AggregationMetrics:
    return _metrics


def format_metrics_report(metrics: Optional[AggregationMetrics] = None) -> str:
    """Generate human-readable metrics report."""
    m = metrics or _metrics

    lines = [
        "# Discovery Metrics",
        "",
        "## System",
        f"- Uptime: {m.uptime_seconds:.0f}s",
        f"- Normal Feeds: {m.aggregations.get('normal', 0)}",
        f"- Previews: {m.aggregations.get('preview', 0)}",
        f"- Aggregate Failures: {m.aggregate_failures}",
        f"- Duplicates Removed: {m.duplicates_removed}",
    ]

    for name, src in sorted(m.sources.items()):
        lines.extend(
            [
                "",
                f"## {name}",
                f"- Success Rate: {src.success_rate:.1f}%",
                f"- Total Calls: {src.total_calls}",
                f"- Failed: {src.failed_calls}",
                f"- Items: {src.total_items}",
                f"- Avg Latency: {src.avg_latency_ms:.0f}ms",
            ]
        )
        for err, count in sorted(src.error_types.items(), key=lambda x: -x[1]):
            lines.append(f"- {err}: {count}")

    return "\n".join(lines)
