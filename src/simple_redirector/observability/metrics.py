"""Prometheus metrics for the redirector.

HTTP metrics are recorded by ``AccessMiddleware``; ``REDIRECT_COUNTS``
is incremented by the dispatcher for every redirect or interstitial
page served. The exposition text is only reachable on the ``localhost``
host via ``GET /metrics``.
"""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# Use the default global registry so prometheus_client's built-in
# process/platform collectors (CPU, memory, GC) are included
# automatically alongside application metrics.

# ---------------------------------------------------------------------------
# HTTP request metrics
# ---------------------------------------------------------------------------

HTTP_REQUESTS_TOTAL = Counter(
    "http_server_requests_total",
    "Total HTTP requests by method, path class, and status code.",
    labelnames=["method", "path", "status"],
    registry=REGISTRY,
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_server_request_duration_seconds",
    "HTTP request latency in seconds.",
    labelnames=["method", "path"],
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=REGISTRY,
)

HTTP_REQUESTS_IN_FLIGHT = Gauge(
    "http_server_requests_in_flight",
    "Number of HTTP requests currently being processed.",
    registry=REGISTRY,
)

# ---------------------------------------------------------------------------
# Redirect metrics
# ---------------------------------------------------------------------------

REDIRECT_COUNTS = Counter(
    "redirect_counts",
    "The number of redirects served, by mapped host and matched mapping rule.",
    labelnames=["host", "rule", "mode"],
    registry=REGISTRY,
)


def metrics_text() -> tuple[bytes, str]:
    """Generate Prometheus exposition text and content-type header."""
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
