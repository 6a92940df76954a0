from music_booking.models.user import User
from music_booking.models.artist import Artist
from music_booking.models.event import Event
from music_booking.models.booking import Booking, BookingStatus

__all__ = ["User", "Artist", "Event", "Booking", "BookingStatus"]
