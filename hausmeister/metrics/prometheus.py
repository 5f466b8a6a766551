# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "hausmeister_requests_total",
    "Total HTTP requests to the hausmeister service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "hausmeister_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "hausmeister_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
REFRESHES_TOTAL = Counter(
    "hausmeister_refreshes_total",
    "Calendar refreshes by outcome",
    ["status"],
)
REFRESH_DURATION = Histogram(
    "hausmeister_refresh_duration_seconds",
    "Time to fetch, parse and resolve the calendar",
)
RESOLVED_OCCURRENCES = Gauge(
    "hausmeister_resolved_occurrences",
    "Number of occurrences in the current snapshot",
)
SKIPPED_RECORDS = Counter(
    "hausmeister_skipped_records_total",
    "Raw records left out of a snapshot because they could not be resolved",
    ["reason"],
)
DUTY_LOOKUPS = Counter(
    "hausmeister_duty_lookups_total",
    "Total duty status lookups performed",
)
TASK_RESETS = Counter(
    "hausmeister_task_resets_total",
    "Checklist resets",
    ["kind"],
)
