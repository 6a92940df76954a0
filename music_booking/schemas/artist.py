"""
Pydantic schemas for artist-related request/response validation.
"""

from pydantic import Field

from music_booking.schemas.common import CamelModel


class ArtistCreate(CamelModel):
    name: str = Field("", max_length=255)
    genre: str = Field("", max_length=100)
    bio: str = ""
    email: str = Field("", max_length=255)


class ArtistResponse(CamelModel):
    id: int
    name: str
    genre: str
    bio: str
    email: str
