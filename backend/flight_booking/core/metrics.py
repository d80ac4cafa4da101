"""
Prometheus metrics for the reservation core.
Exposed at /metrics.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'reservation_booking_attempts_total',
    'Total booking attempts',
    ['outcome']  # booked, sold_out, flight_not_found, error
)

booking_latency = Histogram(
    'reservation_booking_latency_seconds',
    'Time spent inside the booking transaction',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Seat ledger metrics
seat_ledger_operations = Counter(
    'seat_ledger_operations_total',
    'Seat ledger mutations',
    ['operation', 'result']  # decrement/increment, applied/rejected
)

# Lifecycle metrics
reservation_transitions = Counter(
    'reservation_transitions_total',
    'Reservation lifecycle transitions',
    ['transition', 'seat_released']  # cancelled/deleted, true/false
)

# Cache metrics
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


def record_booking_attempt(outcome: str):
    """Record booking outcome. Outcome: booked, sold_out, flight_not_found, error"""
    booking_attempts.labels(outcome=outcome).inc()


def record_seat_operation(operation: str, applied: bool):
    result = "applied" if applied else "rejected"
    seat_ledger_operations.labels(operation=operation, result=result).inc()


def record_transition(transition: str, seat_released: bool):
    reservation_transitions.labels(
        transition=transition,
        seat_released=str(seat_released).lower(),
    ).inc()


def record_cache_operation(operation: str, result: str):
    cache_operations.labels(operation=operation, result=result).inc()
