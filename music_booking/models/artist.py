"""
Artist model. Artists own events but are never updated or deleted.
"""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from music_booking.db.base import Base


class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    genre = Column(String(100), nullable=False, default="")
    bio = Column(Text, nullable=False, default="")
    email = Column(String(255), nullable=False, default="")

    events = relationship(
        "Event",
        primaryjoin="Artist.id == foreign(Event.artist_id)",
        back_populates="artist",
    )

    def __repr__(self) -> str:
        return f"<Artist(id={self.id}, name={self.name})>"
