"""Prometheus metrics for the phonebook API."""

from prometheus_client import Counter, Histogram

HTTP_REQUESTS = Counter(
    "phonebook_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_DURATION = Histogram(
    "phonebook_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
)

RECORD_MUTATIONS = Counter(
    "phonebook_record_mutations_total",
    "Successful record mutations",
    ["collection", "operation"],  # create, replace, delete
)
