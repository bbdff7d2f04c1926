# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "directory_requests_total",
    "Total HTTP requests to the directory service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "directory_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "directory_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Forwarding layer ──
RELAY_REQUESTS = Counter(
    "directory_relay_requests_total",
    "Requests relayed to the hosted collection",
    ["method", "status"],
)
RELAY_LATENCY = Histogram(
    "directory_relay_duration_seconds",
    "Latency of relayed requests",
    ["method"],
)

# ── Client-side controller ──
REMOTE_CALLS = Counter(
    "directory_remote_calls_total",
    "Calls issued by the collection client",
    ["operation", "outcome"],
)
UNIQUENESS_CHECKS = Counter(
    "directory_uniqueness_checks_total",
    "Debounced uniqueness checks that reached the remote collection",
    ["field", "result"],
)
MUTATIONS = Counter(
    "directory_mutations_total",
    "Create/update/delete workflows by outcome",
    ["operation", "outcome"],
)
NOTIFICATIONS_SHOWN = Counter(
    "directory_notifications_shown_total",
    "Transient status messages surfaced to the operator",
)
