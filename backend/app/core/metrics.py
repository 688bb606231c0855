"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking workflow metrics
booking_submissions = Counter(
    'booking_submissions_total',
    'Booking requests submitted',
    ['kind']  # general, samuh_lagan, student_award
)

booking_transitions = Counter(
    'booking_transitions_total',
    'Successful booking status transitions',
    ['kind', 'action']
)

booking_transition_rejections = Counter(
    'booking_transition_rejections_total',
    'Status transitions refused by the state machine',
    ['kind', 'action']
)

booking_deletions = Counter(
    'booking_deletions_total',
    'Bookings hard-deleted by staff',
    ['kind']
)

# Notification metrics
notifications_created = Counter(
    'notifications_created_total',
    'In-app notifications created',
    ['type']  # form, booking
)

# Upload metrics
document_uploads = Counter(
    'document_uploads_total',
    'Document uploads',
    ['result']  # stored, rejected
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

# HTTP
request_latency = Histogram(
    'http_request_latency_seconds',
    'Request latency by route template',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_submission(kind: str):
    booking_submissions.labels(kind=kind).inc()


def record_transition(kind: str, action: str, allowed: bool = True):
    """Record a transition attempt. Refused ones are counted separately."""
    if allowed:
        booking_transitions.labels(kind=kind, action=action).inc()
    else:
        booking_transition_rejections.labels(kind=kind, action=action).inc()


def record_deletion(kind: str):
    booking_deletions.labels(kind=kind).inc()


def record_notification(notification_type: str):
    notifications_created.labels(type=notification_type).inc()


def record_upload(stored: bool):
    document_uploads.labels(result="stored" if stored else "rejected").inc()


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
