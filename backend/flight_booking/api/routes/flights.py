"""
Flight seat endpoints: a cached summary listing and a real-time seat audit.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from flight_booking.db.session import get_db
from flight_booking.schemas.flight import FlightListResponse, FlightSeatsResponse, SeatAuditResponse
from flight_booking.services.flight_service import list_flights
from flight_booking.services.reservation_service import audit_flight_seats
from flight_booking.services.cache_service import get_cached_flights, set_cached_flights
from flight_booking.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/flights", tags=["Flights"])


@router.get("/", response_model=FlightListResponse)
async def list_flights_endpoint(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    available_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    """
    Seat summary per flight, paginated.
    Served from Redis when possible; the cache is dropped after every booking,
    cancellation and deletion.
    """
    cached = await get_cached_flights(page, page_size, available_only)
    if cached:
        logger.info("flights_list_cache_hit", page=page)
        cached["cached"] = True
        return FlightListResponse(**cached)

    flights, total = await list_flights(db, page, page_size, available_only)

    response_data = {
        "flights": [FlightSeatsResponse.model_validate(f).model_dump() for f in flights],
        "total": total,
        "page": page,
        "page_size": page_size,
        "cached": False,
    }
    await set_cached_flights(page, page_size, available_only, response_data)

    return FlightListResponse(**response_data)


@router.get("/{flight_id}/seats", response_model=SeatAuditResponse)
async def get_flight_seats(flight_id: int, db: AsyncSession = Depends(get_db)):
    """Live seat counts next to the number of confirmed reservations. Never cached."""
    audit = await audit_flight_seats(db, flight_id)
    if audit is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Flight {flight_id} not found",
        )
    return audit
