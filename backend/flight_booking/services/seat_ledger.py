"""
Seat ledger: the only writer of a flight's seat counters.

CONCURRENCY STRATEGY: Guarded single-statement updates
=======================================================

Problem:
  Two requests read available_seats=1, both decide there is room, both write 0.
  One seat, two reservations.

Solution:
  The bound check and the write happen in the same statement:

    UPDATE flights SET available_seats = available_seats - 1, version = version + 1
    WHERE id = :flight_id AND available_seats > 0

  The database evaluates the WHERE clause against the current row while holding
  its write lock (row lock on PostgreSQL, database lock on SQLite), so
  concurrent calls on one flight serialize and the check is never made against
  a stale value. rowcount tells us whether the move was allowed. A missing
  flight and an empty flight both leave rowcount at 0.

  Nothing here commits. The statements join the caller's transaction, which is
  how the reservation service makes "seat change + reservation change" one
  atomic unit. The DB CHECK constraints stay as the last line of defence.
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from flight_booking.models.flight import Flight
from flight_booking.core.logging import get_logger
from flight_booking.core.metrics import record_seat_operation

logger = get_logger(__name__)


async def decrement(db: AsyncSession, flight_id: int) -> bool:
    """Take one seat. False (and no change) if the flight is unknown or full."""
    result = await db.execute(
        update(Flight)
        .where(Flight.id == flight_id, Flight.available_seats > 0)
        .values(
            available_seats=Flight.available_seats - 1,
            version=Flight.version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    applied = result.rowcount == 1
    record_seat_operation("decrement", applied)
    logger.debug("seat_decrement", flight_id=flight_id, applied=applied)
    return applied


async def increment(db: AsyncSession, flight_id: int) -> bool:
    """Give one seat back. False (and no change) if the flight is unknown or already full."""
    result = await db.execute(
        update(Flight)
        .where(Flight.id == flight_id, Flight.available_seats < Flight.total_seats)
        .values(
            available_seats=Flight.available_seats + 1,
            version=Flight.version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    applied = result.rowcount == 1
    record_seat_operation("increment", applied)
    logger.debug("seat_increment", flight_id=flight_id, applied=applied)
    return applied

