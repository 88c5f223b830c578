"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total exclusive booking attempts',
    ['outcome']  # created, conflict, invalid_time, not_found
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Time spent validating, checking and persisting a booking',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

booking_status_changes = Counter(
    'booking_status_changes_total',
    'Explicit booking status transitions',
    ['status']
)

# Shared-slot metrics
reservation_attempts = Counter(
    'reservation_attempts_total',
    'Total shared-slot reservation attempts',
    ['outcome']  # created, joined, full, court_unavailable, duplicate
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Availability cache operations',
    ['operation', 'result']  # get/set/invalidate, hit/miss/ok/error
)

# HTTP metrics
http_request_latency = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency',
    ['method', 'status_code'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)


def metrics_endpoint() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(outcome: str):
    booking_attempts.labels(outcome=outcome).inc()


def record_status_change(status: str):
    booking_status_changes.labels(status=status).inc()


def record_reservation_attempt(outcome: str):
    reservation_attempts.labels(outcome=outcome).inc()


def record_cache_operation(operation: str, result: str):
    cache_operations.labels(operation=operation, result=result).inc()
