"""
Flight model carrying the seat inventory.

Key design decisions:
- `available_seats` is the authoritative counter; it is only ever changed by the
  seat ledger's guarded UPDATE statements, never by assigning the attribute
- CHECK constraints keep the counter inside [0, total_seats] even if some
  other writer bypasses the ledger
- `version` is bumped on every seat mutation so readers can tell counts changed
"""

from sqlalchemy import Column, Integer, String, CheckConstraint

from flight_booking.db.base import Base, TimestampMixin


class Flight(Base, TimestampMixin):
    __tablename__ = "flights"

    id = Column(Integer, primary_key=True, index=True)
    flight_number = Column(String(10), nullable=False, index=True)
    total_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("total_seats > 0", name="check_total_seats_positive"),
        CheckConstraint("available_seats >= 0", name="check_available_seats_non_negative"),
        CheckConstraint("available_seats <= total_seats", name="check_available_lte_total"),
    )

    def __repr__(self) -> str:
        return f"<Flight(id={self.id}, number={self.flight_number}, available={self.available_seats}/{self.total_seats})>"
