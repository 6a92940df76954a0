"""
Pydantic schemas for signup and login.
"""

from music_booking.schemas.common import CamelModel


class SignupRequest(CamelModel):
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    phone_number: str = ""
    middle_name: str = ""
    password: str = ""


class LoginRequest(CamelModel):
    email: str = ""
    password: str = ""


class SignupResponse(CamelModel):
    user_id: int
    email: str


class TokenResponse(CamelModel):
    token: str
