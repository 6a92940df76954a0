"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field, PlainSerializer

from music_booking.schemas.common import CamelModel
from music_booking.schemas.artist import ArtistResponse

# Prices stay Decimal in Python but go out as JSON numbers
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class EventCreate(CamelModel):
    artist_id: int
    title: str = Field("", max_length=255)
    date: datetime
    venue: str = Field("", max_length=255)
    ticket_price: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)


class EventSummary(CamelModel):
    id: int
    artist_id: int
    title: str
    date: datetime
    venue: str
    ticket_price: Price


class EventResponse(EventSummary):
    artist: Optional[ArtistResponse] = None
