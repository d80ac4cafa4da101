"""
Domain exceptions and their HTTP mapping.

Capacity rejections and not-found results are ordinary return values of the
reservation services. Only failures of the persistence layer travel as
exceptions: they abort the enclosing transaction and surface as a generic 500.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from flight_booking.core.logging import get_logger

logger = get_logger(__name__)


class ReservationStoreError(Exception):
    """The database failed while applying a reservation or seat change."""

    def __init__(self, operation: str, message: str = "Reservation store unavailable"):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


async def reservation_store_error_handler(request: Request, exc: ReservationStoreError) -> JSONResponse:
    logger.error(
        "reservation_store_error",
        operation=exc.operation,
        error=str(exc.__cause__ or exc),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Reservation could not be processed. Please try again later."},
    )
