"""
Catalog service: artists and the events they play.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from music_booking.core.config import Settings
from music_booking.core.errors import NotFoundError, ValidationError
from music_booking.core.logging import get_logger
from music_booking.core.metrics import record_catalog_write
from music_booking.models.artist import Artist
from music_booking.models.event import Event
from music_booking.schemas.artist import ArtistCreate
from music_booking.schemas.event import EventCreate

logger = get_logger(__name__)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CatalogService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def create_artist(self, artist_data: ArtistCreate) -> Artist:
        if not artist_data.name.strip():
            raise ValidationError("Artist name is required.")

        artist = Artist(
            name=artist_data.name,
            genre=artist_data.genre,
            bio=artist_data.bio,
            email=artist_data.email,
        )
        self.db.add(artist)
        await self.db.commit()
        await self.db.refresh(artist)

        logger.info("artist_created", artist_id=artist.id, name=artist.name)
        record_catalog_write("artist")
        return artist

    async def list_artists(self) -> list[Artist]:
        result = await self.db.execute(select(Artist).order_by(Artist.id))
        return list(result.scalars().all())

    async def get_artist(self, artist_id: int) -> Artist:
        result = await self.db.execute(select(Artist).where(Artist.id == artist_id))
        artist = result.scalar_one_or_none()

        if not artist:
            raise NotFoundError("Artist not found.")
        return artist

    async def create_event(self, event_data: EventCreate) -> Event:
        """
        Schedule an event. The date may be now or later, never earlier.
        The artist id is stored as given, whether or not such an artist exists.
        """
        event_date = as_utc(event_data.date)
        if event_date < datetime.now(timezone.utc):
            logger.warning("event_rejected", reason="past_date", date=event_date.isoformat())
            raise ValidationError("Event date cannot be in the past.")

        event = Event(
            artist_id=event_data.artist_id,
            title=event_data.title,
            date=event_date,
            venue=event_data.venue,
            ticket_price=event_data.ticket_price,
        )
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)

        logger.info("event_created", event_id=event.id, artist_id=event.artist_id, title=event.title)
        record_catalog_write("event")
        return event

    async def list_events(self) -> list[Event]:
        result = await self.db.execute(
            select(Event)
            .options(selectinload(Event.artist))
            .order_by(Event.id)
        )
        return list(result.scalars().all())
