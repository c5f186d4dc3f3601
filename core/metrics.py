"""
Prometheus metrics for the plugin license service.

Custom metrics for license lifecycle outcomes and remote call latency.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "pls_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "pls_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License lifecycle metrics
licenses_provisioned_total = Counter(
    "pls_licenses_provisioned_total",
    "Provision calls by outcome (reused, provisioned, failed)",
    ["provider", "outcome"],
)

licenses_activated_total = Counter(
    "pls_licenses_activated_total",
    "Activation calls by outcome (reused, activated, failed)",
    ["outcome"],
)

license_checks_total = Counter(
    "pls_license_checks_total",
    "Validity checks by result (valid, invalid, error)",
    ["result"],
)

# Remote licensing API metrics
licensing_api_request_duration_seconds = Histogram(
    "pls_licensing_api_request_duration_seconds",
    "Licensing API request duration in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

licensing_api_errors_total = Counter(
    "pls_licensing_api_errors_total",
    "Licensing API errors",
    ["operation", "error_type"],
)

# Error metrics
errors_total = Counter(
    "pls_errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
