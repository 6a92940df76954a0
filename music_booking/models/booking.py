"""
Booking model: a user's ticket request for an event.

Bookings are insert-only. `status` is always "Pending"; there is no
confirm/cancel transition and no per-user uniqueness.
`user_id` is a plain integer, not a relation to the users table.
"""

from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from music_booking.db.base import Base


class BookingStatus(str, Enum):
    PENDING = "Pending"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    booking_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)

    event = relationship("Event", back_populates="bookings")

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, event={self.event_id}, status={self.status})>"
