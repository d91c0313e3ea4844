"""Prometheus metrics for field edits, rate refreshes and HTTP latency"""

from prometheus_client import Counter, Histogram

# Field edit metrics
field_edit_counter = Counter(
    "interest_calc_field_edits_total",
    "Field input events handled",
    ["field", "outcome"],  # accepted | invalid | degenerate
)

# Rate source metrics
rate_refresh_counter = Counter(
    "interest_calc_rate_refresh_total",
    "Rate-table refreshes completed",
    ["outcome"],  # updated | unavailable | cancelled
)

rate_fetch_latency_histogram = Histogram(
    "rate_fetch_latency_seconds",
    "Exchange-rate source response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

rate_fetch_failures_counter = Counter(
    "rate_fetch_failures_total",
    "Failed exchange-rate fetches",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_field_edit(field_id: str, outcome: str) -> None:
    """Record one handled field input event"""
    field_edit_counter.labels(field=field_id, outcome=outcome).inc()


def record_rate_refresh(outcome: str) -> None:
    rate_refresh_counter.labels(outcome=outcome).inc()
