"""
Pydantic schemas for reservation request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from flight_booking.models.reservation import ReservationStatus


class PassengerDetails(BaseModel):
    passenger_name: str = Field(..., min_length=1, max_length=100)
    passenger_email: EmailStr
    passenger_phone: Optional[str] = Field(None, max_length=20)
    seat_number: Optional[str] = Field(None, max_length=10)


class ReservationCreate(PassengerDetails):
    flight_id: int


class ReservationUpdate(PassengerDetails):
    pass


class ReservationResponse(BaseModel):
    id: int
    flight_id: int
    passenger_name: str
    passenger_email: str
    passenger_phone: Optional[str]
    seat_number: Optional[str]
    status: ReservationStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class ReservationCancelResponse(BaseModel):
    message: str
    reservation_id: int
    status: ReservationStatus
