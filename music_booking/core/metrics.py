"""
Prometheus metrics, exposed at /metrics.
"""

from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

booking_attempts = Counter(
    'booking_attempts_total',
    'Total booking attempts',
    ['status']  # created, event_not_found
)

auth_attempts = Counter(
    'auth_attempts_total',
    'Signup and login attempts',
    ['operation', 'result']  # signup/login, success/invalid/conflict
)

catalog_writes = Counter(
    'catalog_writes_total',
    'Artists and events created',
    ['entity']
)

rate_limited_requests = Counter(
    'rate_limited_requests_total',
    'Requests rejected by the fixed-window rate limiter'
)

redis_circuit_breaker_open = Gauge(
    'redis_circuit_breaker_open',
    'Redis circuit breaker state (1=open, 0=closed)'
)

cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set/invalidate, hit/miss/ok/error
)


def metrics_endpoint() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str):
    booking_attempts.labels(status=status).inc()


def record_auth_attempt(operation: str, result: str):
    auth_attempts.labels(operation=operation, result=result).inc()


def record_catalog_write(entity: str):
    catalog_writes.labels(entity=entity).inc()


def record_cache_operation(operation: str, result: str):
    cache_operations.labels(operation=operation, result=result).inc()
