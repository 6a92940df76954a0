"""
Booking service.

A booking is a single insert: the referenced event must exist, the booking
date is the server's current UTC time and the status is always "Pending".
There is no seat inventory, so bookings are never checked for capacity or
duplicates, and concurrent bookings against one event all succeed.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from music_booking.core.config import Settings
from music_booking.core.errors import NotFoundError
from music_booking.core.logging import get_logger
from music_booking.core.metrics import record_booking_attempt
from music_booking.models.booking import Booking, BookingStatus
from music_booking.models.event import Event
from music_booking.schemas.booking import BookingCreate

logger = get_logger(__name__)


class BookingService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def create_booking(self, booking_data: BookingCreate) -> Booking:
        result = await self.db.execute(select(Event.id).where(Event.id == booking_data.event_id))
        if result.scalar_one_or_none() is None:
            logger.warning("booking_failed", reason="event_not_found", event_id=booking_data.event_id)
            record_booking_attempt("event_not_found")
            raise NotFoundError("Event not found.")

        booking = Booking(
            event_id=booking_data.event_id,
            user_id=booking_data.user_id,
            booking_date=datetime.now(timezone.utc),
            status=BookingStatus.PENDING.value,
        )
        self.db.add(booking)
        await self.db.commit()
        await self.db.refresh(booking)

        logger.info(
            "booking_created",
            booking_id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
        )
        record_booking_attempt("created")
        return booking

    async def list_bookings_by_user(self, user_id: int) -> list[Booking]:
        """All bookings for a user with their events attached; empty if none."""
        result = await self.db.execute(
            select(Booking)
            .options(selectinload(Booking.event))
            .where(Booking.user_id == user_id)
            .order_by(Booking.id)
        )
        return list(result.scalars().all())
