"""Prometheus metrics for search observability."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_LATENCY = Histogram(
    "search_latency_seconds",
    "Latency of snapshot builds and searches",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

SEARCH_REQUESTS = Counter(
    "search_requests",
    "Search requests by outcome",
    ["outcome"],
)

INDEX_DOC_COUNT = Gauge(
    "index_document_count",
    "Documents in the current snapshot",
    ["state"],
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()
