"""Prometheus metrics for recordkeeper."""

from prometheus_client import Counter

RECORD_QUERIES = Counter(
    "recordkeeper_record_queries_total",
    "Total number of record read operations",
    labelnames=["mode"],
)

RECORD_MUTATIONS = Counter(
    "recordkeeper_record_mutations_total",
    "Total number of record mutations by outcome",
    labelnames=["operation", "status"],
)

ERRORS = Counter(
    "recordkeeper_errors_total",
    "Total number of errors surfaced to callers",
    labelnames=["error_type"],
)
