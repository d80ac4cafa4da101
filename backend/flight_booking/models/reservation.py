"""
Reservation model: one passenger holding one seat on one flight.

Key design decisions:
- The flight is referenced by id only; no relationship is loaded so a
  reservation can be passed around without dragging flight state with it
- Status is a plain string column guarded by a CHECK constraint
- No uniqueness on seat_number: it is an opaque label
"""

import enum

from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, Index

from flight_booking.db.base import Base, TimestampMixin


class ReservationStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    # Never assigned by any lifecycle operation yet
    PENDING = "PENDING"


class Reservation(Base, TimestampMixin):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    flight_id = Column(Integer, ForeignKey("flights.id"), nullable=False, index=True)
    passenger_name = Column(String(100), nullable=False)
    passenger_email = Column(String(100), nullable=False, index=True)
    passenger_phone = Column(String(20), nullable=True)
    seat_number = Column(String(10), nullable=True)
    status = Column(String(20), nullable=False, default=ReservationStatus.CONFIRMED.value)

    __table_args__ = (
        CheckConstraint(
            "status IN ('CONFIRMED', 'CANCELLED', 'PENDING')",
            name="check_reservation_status",
        ),
        # Seat audits count confirmed reservations per flight
        Index("ix_reservations_flight_status", "flight_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Reservation(id={self.id}, flight={self.flight_id}, status={self.status})>"
