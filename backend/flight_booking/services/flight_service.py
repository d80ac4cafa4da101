"""
Read-only flight queries for the seat summary listing.
Seat counts are never written here; see seat_ledger.
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from flight_booking.models.flight import Flight


async def list_flights(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 20,
    available_only: bool = False,
) -> tuple[list[Flight], int]:
    """List flights with pagination, optionally only those with seats left."""
    query = select(Flight)

    if available_only:
        query = query.where(Flight.available_seats > 0)

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar()

    result = await db.execute(
        query
        .order_by(Flight.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .execution_options(populate_existing=True)
    )
    flights = list(result.scalars().all())

    return flights, total
