from music_booking.schemas.common import Result, ResponseCode, success, failure
from music_booking.schemas.user import SignupRequest, LoginRequest, SignupResponse, TokenResponse
from music_booking.schemas.artist import ArtistCreate, ArtistResponse
from music_booking.schemas.event import EventCreate, EventSummary, EventResponse
from music_booking.schemas.booking import BookingCreate, BookingResponse

__all__ = [
    "Result", "ResponseCode", "success", "failure",
    "SignupRequest", "LoginRequest", "SignupResponse", "TokenResponse",
    "ArtistCreate", "ArtistResponse",
    "EventCreate", "EventSummary", "EventResponse",
    "BookingCreate", "BookingResponse",
]
