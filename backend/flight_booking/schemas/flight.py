"""
Pydantic schemas for flight seat read models.
"""

from pydantic import BaseModel


class FlightSeatsResponse(BaseModel):
    id: int
    flight_number: str
    total_seats: int
    available_seats: int

    model_config = {"from_attributes": True}


class FlightListResponse(BaseModel):
    flights: list[FlightSeatsResponse]
    total: int
    page: int
    page_size: int
    cached: bool = False


class SeatAuditResponse(BaseModel):
    flight_id: int
    total_seats: int
    available_seats: int
    confirmed_reservations: int
    consistent: bool

    model_config = {"from_attributes": True}
