from flight_booking.models.flight import Flight
from flight_booking.models.reservation import Reservation, ReservationStatus

__all__ = ["Flight", "Reservation", "ReservationStatus"]
