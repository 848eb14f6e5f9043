from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "mindbloom_requests_total",
    "Total HTTP requests processed by Mindbloom",
    ("method", "path", "status"),
)

REQUEST_LATENCY = Histogram(
    "mindbloom_request_latency_seconds",
    "HTTP request latency in seconds",
    ("method", "path"),
)

REQUEST_ERRORS = Counter(
    "mindbloom_request_errors_total",
    "HTTP requests resulting in server errors",
    ("method", "path", "status"),
)

USER_API_COUNTER = Counter(
    "mindbloom_user_api_hits_total",
    "Authenticated API hits per endpoint",
    ("endpoint",),
)

RECORDS_CREATED = Counter(
    "mindbloom_records_created_total",
    "Mood, session and emotion records stored",
    ("kind",),
)

PROGRESS_COMPUTE_LATENCY = Histogram(
    "mindbloom_progress_compute_seconds",
    "Time spent running the progress engine",
    ("operation",),
)

__all__ = [
    "PROGRESS_COMPUTE_LATENCY",
    "RECORDS_CREATED",
    "REQUEST_COUNT",
    "REQUEST_ERRORS",
    "REQUEST_LATENCY",
    "USER_API_COUNTER",
]
