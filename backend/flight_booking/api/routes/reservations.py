"""
Reservation endpoints. Thin mapping from HTTP onto the reservation lifecycle.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from flight_booking.db.session import get_db
from flight_booking.models.reservation import ReservationStatus
from flight_booking.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationCancelResponse,
)
from flight_booking.services import reservation_service
from flight_booking.services.reservation_service import BookingRejected, RejectionReason
from flight_booking.services.cache_service import invalidate_flight_cache

router = APIRouter(prefix="/reservations", tags=["Reservations"])


def _reservation_not_found(reservation_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Reservation {reservation_id} not found",
    )


@router.get("/", response_model=list[ReservationResponse])
async def list_reservations(
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    return await reservation_service.list_reservations(db, status_filter)


@router.get("/email/{email}", response_model=list[ReservationResponse])
async def list_reservations_by_email(email: str, db: AsyncSession = Depends(get_db)):
    return await reservation_service.list_reservations_by_email(db, email)


@router.get("/flight/{flight_id}", response_model=list[ReservationResponse])
async def list_reservations_by_flight(flight_id: int, db: AsyncSession = Depends(get_db)):
    return await reservation_service.list_reservations_by_flight(db, flight_id)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(reservation_id: int, db: AsyncSession = Depends(get_db)):
    reservation = await reservation_service.get_reservation(db, reservation_id)
    if reservation is None:
        raise _reservation_not_found(reservation_id)
    return reservation


@router.post("/", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    reservation_data: ReservationCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Book one seat on a flight.

    404 if the flight does not exist, 409 if it is sold out. Neither case
    leaves anything behind in the database.
    """
    outcome = await reservation_service.book_reservation(
        db,
        flight_id=reservation_data.flight_id,
        passenger_name=reservation_data.passenger_name,
        passenger_email=reservation_data.passenger_email,
        passenger_phone=reservation_data.passenger_phone,
        seat_number=reservation_data.seat_number,
    )
    if isinstance(outcome, BookingRejected):
        if outcome.reason == RejectionReason.FLIGHT_NOT_FOUND:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Flight {outcome.flight_id} not found",
            )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Flight {outcome.flight_id} is sold out",
        )

    await invalidate_flight_cache()
    return outcome


@router.put("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: int,
    reservation_data: ReservationUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Change passenger details. Flight and status cannot be changed here."""
    reservation = await reservation_service.update_reservation(
        db,
        reservation_id,
        passenger_name=reservation_data.passenger_name,
        passenger_email=reservation_data.passenger_email,
        passenger_phone=reservation_data.passenger_phone,
        seat_number=reservation_data.seat_number,
    )
    if reservation is None:
        raise _reservation_not_found(reservation_id)
    return reservation


@router.patch("/{reservation_id}/cancel", response_model=ReservationCancelResponse)
async def cancel_reservation(reservation_id: int, db: AsyncSession = Depends(get_db)):
    """Cancel a reservation and release its seat. Repeating the call is harmless."""
    if not await reservation_service.cancel_reservation(db, reservation_id):
        raise _reservation_not_found(reservation_id)

    await invalidate_flight_cache()
    return ReservationCancelResponse(
        message="Reservation cancelled",
        reservation_id=reservation_id,
        status=ReservationStatus.CANCELLED,
    )


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reservation(reservation_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a reservation. Unknown ids also answer 204."""
    await reservation_service.delete_reservation(db, reservation_id)
    await invalidate_flight_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
