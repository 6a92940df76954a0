"""
Event model: a dated performance by an artist at a venue.

Key design decisions:
- `artist_id` carries no database foreign key. Events may reference an
  artist id that does not exist; `Event.artist` is then None.
- `ticket_price` is a fixed-point decimal, never negative.
- Index on `date` for listing upcoming shows.
"""

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Index, CheckConstraint
from sqlalchemy.orm import relationship

from music_booking.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    artist_id = Column(Integer, nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    date = Column(DateTime(timezone=True), nullable=False)
    venue = Column(String(255), nullable=False, default="")
    ticket_price = Column(Numeric(10, 2), nullable=False, default=0)

    artist = relationship(
        "Artist",
        primaryjoin="foreign(Event.artist_id) == Artist.id",
        back_populates="events",
    )
    bookings = relationship("Booking", back_populates="event")

    __table_args__ = (
        CheckConstraint("ticket_price >= 0", name="check_ticket_price_non_negative"),
        Index("ix_events_date", "date"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, artist={self.artist_id}, date={self.date})>"
