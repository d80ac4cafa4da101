"""
Reservation lifecycle: book, update, cancel, delete, plus read accessors.

Every capacity-affecting operation runs inside one transaction that covers
both the seat ledger statement and the reservation row change. Either both
are committed or neither is; readers on other connections never see a seat
taken without its reservation, or a reservation without its seat.

Lifecycle:

    (none) --book--> CONFIRMED --cancel--> CANCELLED
                         |                     |
                         +------delete---------+--> (removed)

  Only the CONFIRMED -> CANCELLED and CONFIRMED -> removed moves release a
  seat. Both are written as status-guarded statements, so two concurrent
  cancels (or a cancel racing a delete) release at most one seat.

Outcomes:
  Sold-out and unknown-flight bookings are returned as BookingRejected values.
  Unknown reservations give None / False / no-op. Database failures raise
  ReservationStoreError after the transaction has been rolled back.
"""

import enum
import time
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from flight_booking.db.session import atomic
from flight_booking.models.flight import Flight
from flight_booking.models.reservation import Reservation, ReservationStatus
from flight_booking.services import seat_ledger
from flight_booking.core.exceptions import ReservationStoreError
from flight_booking.core.logging import get_logger
from flight_booking.core.metrics import booking_latency, record_booking_attempt, record_transition

logger = get_logger(__name__)


class RejectionReason(str, enum.Enum):
    FLIGHT_NOT_FOUND = "flight_not_found"
    NO_SEATS_AVAILABLE = "no_seats_available"


@dataclass(frozen=True)
class BookingRejected:
    reason: RejectionReason
    flight_id: int


@dataclass(frozen=True)
class SeatAudit:
    flight_id: int
    total_seats: int
    available_seats: int
    confirmed_reservations: int

    @property
    def consistent(self) -> bool:
        return self.confirmed_reservations + self.available_seats == self.total_seats


async def book_reservation(
    db: AsyncSession,
    flight_id: int,
    passenger_name: str,
    passenger_email: str,
    passenger_phone: Optional[str] = None,
    seat_number: Optional[str] = None,
) -> Union[Reservation, BookingRejected]:
    """
    Take a seat on the flight and record the reservation as CONFIRMED.

    The flight lookup happens first so an unknown flight never reaches the
    ledger. The reservation row is only inserted after the ledger granted a
    seat, and both changes commit together.
    """
    started = time.perf_counter()
    try:
        async with atomic(db, "book"):
            flight_exists = await db.scalar(select(Flight.id).where(Flight.id == flight_id))
            if flight_exists is None:
                record_booking_attempt("flight_not_found")
                logger.info("booking_rejected", flight_id=flight_id, reason=RejectionReason.FLIGHT_NOT_FOUND.value)
                return BookingRejected(RejectionReason.FLIGHT_NOT_FOUND, flight_id)

            if not await seat_ledger.decrement(db, flight_id):
                record_booking_attempt("sold_out")
                logger.info("booking_rejected", flight_id=flight_id, reason=RejectionReason.NO_SEATS_AVAILABLE.value)
                return BookingRejected(RejectionReason.NO_SEATS_AVAILABLE, flight_id)

            reservation = Reservation(
                flight_id=flight_id,
                passenger_name=passenger_name,
                passenger_email=passenger_email,
                passenger_phone=passenger_phone,
                seat_number=seat_number,
                status=ReservationStatus.CONFIRMED.value,
            )
            db.add(reservation)
            await db.flush()
    except ReservationStoreError:
        record_booking_attempt("error")
        raise
    finally:
        booking_latency.observe(time.perf_counter() - started)

    record_booking_attempt("booked")
    logger.info(
        "reservation_booked",
        reservation_id=reservation.id,
        flight_id=flight_id,
        seat_number=seat_number,
    )
    return reservation


async def update_reservation(
    db: AsyncSession,
    reservation_id: int,
    passenger_name: str,
    passenger_email: str,
    passenger_phone: Optional[str] = None,
    seat_number: Optional[str] = None,
) -> Optional[Reservation]:
    """
    Replace the passenger details of a reservation.
    Flight, status and creation time are left alone; no seat is taken or
    released whatever the current status is.
    """
    async with atomic(db, "update"):
        reservation = await db.get(Reservation, reservation_id, populate_existing=True)
        if reservation is None:
            return None

        reservation.passenger_name = passenger_name
        reservation.passenger_email = passenger_email
        reservation.passenger_phone = passenger_phone
        reservation.seat_number = seat_number
        await db.flush()

    logger.info("reservation_updated", reservation_id=reservation_id, status=reservation.status)
    return reservation


async def cancel_reservation(db: AsyncSession, reservation_id: int) -> bool:
    """
    Mark a reservation CANCELLED and hand its seat back to the flight.

    Returns False when the reservation does not exist, including when a
    concurrent delete removed it after the lookup. Cancelling an
    already cancelled reservation returns True without touching the ledger.
    The seat release is best-effort: if the ledger refuses (flight already
    full), the cancellation still stands.
    """
    async with atomic(db, "cancel"):
        flight_id = await db.scalar(select(Reservation.flight_id).where(Reservation.id == reservation_id))
        if flight_id is None:
            return False

        transition = await db.execute(
            update(Reservation)
            .where(
                Reservation.id == reservation_id,
                Reservation.status == ReservationStatus.CONFIRMED.value,
            )
            .values(status=ReservationStatus.CANCELLED.value)
            .execution_options(synchronize_session=False)
        )
        was_confirmed = transition.rowcount == 1

        released = False
        if was_confirmed:
            released = await seat_ledger.increment(db, flight_id)
            if not released:
                logger.warning("seat_release_skipped", reservation_id=reservation_id, flight_id=flight_id)
        else:
            # PENDING rows also land here: they never held a seat
            fallback = await db.execute(
                update(Reservation)
                .where(Reservation.id == reservation_id)
                .values(status=ReservationStatus.CANCELLED.value)
                .execution_options(synchronize_session=False)
            )
            if fallback.rowcount == 0:
                # Deleted by another request after the lookup
                return False

    record_transition("cancelled", released)
    logger.info(
        "reservation_cancelled",
        reservation_id=reservation_id,
        flight_id=flight_id,
        seat_released=released,
        already_cancelled=not was_confirmed,
    )
    return True


async def delete_reservation(db: AsyncSession, reservation_id: int) -> None:
    """
    Remove a reservation. A CONFIRMED one gives its seat back first, in the
    same transaction; a CANCELLED one already did. Unknown ids are a no-op.
    """
    async with atomic(db, "delete"):
        flight_id = await db.scalar(select(Reservation.flight_id).where(Reservation.id == reservation_id))
        if flight_id is None:
            return

        confirmed_delete = await db.execute(
            delete(Reservation)
            .where(
                Reservation.id == reservation_id,
                Reservation.status == ReservationStatus.CONFIRMED.value,
            )
            .execution_options(synchronize_session=False)
        )
        released = False
        if confirmed_delete.rowcount == 1:
            released = await seat_ledger.increment(db, flight_id)
            if not released:
                logger.warning("seat_release_skipped", reservation_id=reservation_id, flight_id=flight_id)
        else:
            await db.execute(
                delete(Reservation)
                .where(Reservation.id == reservation_id)
                .execution_options(synchronize_session=False)
            )

    record_transition("deleted", released)
    logger.info("reservation_deleted", reservation_id=reservation_id, flight_id=flight_id, seat_released=released)


# Read accessors

async def list_reservations(
    db: AsyncSession,
    status: Optional[ReservationStatus] = None,
) -> list[Reservation]:
    query = select(Reservation)
    if status is not None:
        query = query.where(Reservation.status == status.value)
    result = await db.execute(
        query.order_by(Reservation.created_at.asc(), Reservation.id.asc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def get_reservation(db: AsyncSession, reservation_id: int) -> Optional[Reservation]:
    return await db.get(Reservation, reservation_id, populate_existing=True)


async def list_reservations_by_email(db: AsyncSession, passenger_email: str) -> list[Reservation]:
    result = await db.execute(
        select(Reservation)
        .where(Reservation.passenger_email == passenger_email)
        .order_by(Reservation.created_at.asc(), Reservation.id.asc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def list_reservations_by_flight(db: AsyncSession, flight_id: int) -> list[Reservation]:
    result = await db.execute(
        select(Reservation)
        .where(Reservation.flight_id == flight_id)
        .order_by(Reservation.created_at.asc(), Reservation.id.asc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def audit_flight_seats(db: AsyncSession, flight_id: int) -> Optional[SeatAudit]:
    """
    Compare the ledger against the reservation table for one flight.
    Both numbers come from the same query so they describe one snapshot.
    """
    confirmed = (
        select(func.count(Reservation.id))
        .where(
            Reservation.flight_id == Flight.id,
            Reservation.status == ReservationStatus.CONFIRMED.value,
        )
        .correlate(Flight)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Flight.total_seats, Flight.available_seats, confirmed.label("confirmed"))
        .where(Flight.id == flight_id)
    )
    row = result.one_or_none()
    if row is None:
        return None
    audit = SeatAudit(
        flight_id=flight_id,
        total_seats=row.total_seats,
        available_seats=row.available_seats,
        confirmed_reservations=row.confirmed,
    )
    if not audit.consistent:
        logger.warning(
            "seat_audit_mismatch",
            flight_id=flight_id,
            total=audit.total_seats,
            available=audit.available_seats,
            confirmed=audit.confirmed_reservations,
        )
    return audit
