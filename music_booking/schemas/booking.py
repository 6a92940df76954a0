"""
Pydantic schemas for booking-related request/response validation.

BookingCreate deliberately has no date or status fields: both are assigned
by the server, and unknown JSON keys are ignored.
"""

from datetime import datetime
from typing import Optional

from music_booking.schemas.common import CamelModel
from music_booking.schemas.event import EventSummary


class BookingCreate(CamelModel):
    event_id: int
    user_id: int


class BookingResponse(CamelModel):
    id: int
    event_id: int
    user_id: int
    booking_date: datetime
    status: str
    event: Optional[EventSummary] = None
