"""
Prometheus metrics for the license tracker.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["source"],
)

license_status_transitions_total = Counter(
    "license_status_transitions_total",
    "Total license status transitions",
    ["new_status"],
)

payment_records_total = Counter(
    "payment_records_total",
    "Total payment records written",
    ["source"],
)

csv_import_rows_total = Counter(
    "csv_import_rows_total",
    "Total CSV rows processed by import",
    ["outcome"],
)

# Notification metrics
expiry_notifications_total = Counter(
    "expiry_notifications_total",
    "Total expiry notifications attempted",
    ["urgency", "outcome"],
)

expiry_sweep_duration_seconds = Histogram(
    "expiry_sweep_duration_seconds",
    "Expiry notification sweep duration in seconds",
    buckets=[0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
