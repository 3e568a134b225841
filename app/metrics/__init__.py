# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Prometheus metrics for the incident event service."""
from prometheus_client import Counter, Gauge, Histogram

EVENTS_CREATED = Counter(
    "incident_events_created_total", "Total incident events appended", ["kind"]
)
EVENTS_REJECTED = Counter(
    "incident_events_rejected_total", "Event creations rejected by validation"
)
EVENTS_IN_LOG = Gauge(
    "incident_events_in_log", "Current number of events in the log"
)
NOTIFIER_CALLS = Counter(
    "notifier_calls_total", "Notifier invocations during dispatch", ["notifier", "status"]
)
DISPATCH_DURATION = Histogram(
    "event_dispatch_seconds",
    "Time to fan an event out to all matching notifiers",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)
