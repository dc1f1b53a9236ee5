"""Prometheus metrics for the Aura Gateway service.

Metrics are organized into two categories:

Business Metrics (for Product/Risk):
- aura_score_computations_total: Scores computed by tier and history
- aura_score_distribution: Distribution of computed scores
- aura_lookup_fallbacks_total: Ledger lookups degraded to their fallback

Technical Metrics (for Engineering/SRE):
- aura_score_latency_seconds: End-to-end scoring latency
- aura_ledger_fetch_latency_seconds: Ledger API latency
- aura_ledger_fetch_total: Ledger API requests by outcome
- aura_ledger_fetch_failures_total: Ledger API failures by type
- aura_ledger_fetch_retry_total: Ledger API retries
- aura_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Risk dashboards)
# =============================================================================

score_computations_total = Counter(
    "aura_score_computations_total",
    "Total number of Aura scores computed",
    ["tier", "has_history", "source"],  # source: ledger, supplied
)

score_distribution = Histogram(
    "aura_score_distribution",
    "Distribution of computed Aura scores",
    buckets=[0, 200, 400, 500, 550, 700, 850, 1000],
)

lookup_fallbacks_total = Counter(
    "aura_lookup_fallbacks_total",
    "Ledger lookups that failed and were replaced by their fallback value",
    ["field"],  # collateral_locked, nft_loans
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

score_latency = Histogram(
    "aura_score_latency_seconds",
    "Aura evaluation latency in seconds (collection and scoring)",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

ledger_fetch_latency = Histogram(
    "aura_ledger_fetch_latency_seconds",
    "Ledger API fetch latency in seconds",
    ["call"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ledger_fetch_total = Counter(
    "aura_ledger_fetch_total",
    "Total number of ledger API requests",
    ["call", "status"],  # status: success, failure
)

ledger_fetch_failures = Counter(
    "aura_ledger_fetch_failures_total",
    "Total number of ledger API failures",
    ["call", "error_type"],  # timeout, error, not_found, bad_data
)

ledger_fetch_retries = Counter(
    "aura_ledger_fetch_retry_total",
    "Total number of ledger API retries",
    ["call"],
)

http_requests_total = Counter(
    "aura_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "aura_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_score(tier: str, has_history: bool, score: int, source: str = "ledger") -> None:
    """Record a computed Aura score."""
    score_computations_total.labels(
        tier=tier,
        has_history=str(has_history).lower(),
        source=source,
    ).inc()
    score_distribution.observe(score)


def record_lookup_fallback(field: str) -> None:
    """Record a ledger lookup that was replaced by its fallback value."""
    lookup_fallbacks_total.labels(field=field).inc()


@contextmanager
def track_score_latency() -> Generator[None, None, None]:
    """Context manager to track Aura evaluation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        score_latency.observe(duration)


@contextmanager
def track_ledger_fetch_latency(call: str) -> Generator[None, None, None]:
    """Context manager to track ledger API fetch latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        ledger_fetch_latency.labels(call=call).observe(duration)


def record_ledger_fetch_success(call: str) -> None:
    """Record a successful ledger API fetch."""
    ledger_fetch_total.labels(call=call, status="success").inc()


def record_ledger_fetch_failure(call: str, error_type: str) -> None:
    """Record a ledger API fetch failure."""
    ledger_fetch_total.labels(call=call, status="failure").inc()
    ledger_fetch_failures.labels(call=call, error_type=error_type).inc()


def record_ledger_fetch_retry(call: str) -> None:
    """Record a ledger API retry attempt."""
    ledger_fetch_retries.labels(call=call).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
