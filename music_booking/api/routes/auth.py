"""
Authentication endpoints: signup and login.
"""

from fastapi import APIRouter, Depends, status

from music_booking.api.deps import get_auth_service
from music_booking.schemas.common import Result, success
from music_booking.schemas.user import LoginRequest, SignupRequest, SignupResponse, TokenResponse
from music_booking.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=Result[SignupResponse], status_code=status.HTTP_201_CREATED)
async def signup(signup_data: SignupRequest, service: AuthService = Depends(get_auth_service)):
    """Register a new user account."""
    user = await service.signup(signup_data)
    return success(
        SignupResponse(user_id=user.id, email=user.email),
        "User registered successfully.",
    )


@router.post("/login", response_model=Result[TokenResponse])
async def login(login_data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Authenticate and receive a JWT valid for one hour."""
    token = await service.login(login_data)
    return success(TokenResponse(token=token), "Login successful.")
