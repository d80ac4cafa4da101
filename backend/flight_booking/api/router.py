"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from flight_booking.api.routes import flights, reservations

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(flights.router)
api_router.include_router(reservations.router)
