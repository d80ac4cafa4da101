from flight_booking.schemas.flight import FlightSeatsResponse, FlightListResponse, SeatAuditResponse
from flight_booking.schemas.reservation import (
    ReservationCreate, ReservationUpdate, ReservationResponse, ReservationCancelResponse,
)

__all__ = [
    "FlightSeatsResponse", "FlightListResponse", "SeatAuditResponse",
    "ReservationCreate", "ReservationUpdate", "ReservationResponse", "ReservationCancelResponse",
]
