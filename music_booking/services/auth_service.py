"""
Authentication service handling user signup and login.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from music_booking.core.config import Settings
from music_booking.core.errors import AuthError, ConflictError, ValidationError
from music_booking.core.logging import get_logger
from music_booking.core.metrics import record_auth_attempt
from music_booking.core.security import create_access_token, hash_password, verify_password
from music_booking.models.user import User
from music_booking.schemas.user import LoginRequest, SignupRequest

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."


class AuthService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def signup(self, signup_data: SignupRequest) -> User:
        """
        Register a new user with a hashed password.
        Raises ValidationError on empty email/password, ConflictError if the
        email is taken.
        """
        email = signup_data.email.strip()
        if not email or not signup_data.password.strip():
            record_auth_attempt("signup", "invalid")
            raise ValidationError("Email and password are required.")

        result = await self.db.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            logger.warning("signup_failed", reason="email_exists", email=email)
            record_auth_attempt("signup", "conflict")
            raise ConflictError("Email already registered.")

        user = User(
            email=email,
            first_name=signup_data.first_name,
            last_name=signup_data.last_name,
            middle_name=signup_data.middle_name,
            phone_number=signup_data.phone_number,
            hashed_password=hash_password(signup_data.password),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email
            await self.db.rollback()
            logger.warning("signup_failed", reason="unique_violation", email=email)
            record_auth_attempt("signup", "conflict")
            raise ConflictError("Email already registered.") from exc
        await self.db.refresh(user)

        logger.info("user_registered", user_id=user.id, email=user.email)
        record_auth_attempt("signup", "success")
        return user

    async def login(self, login_data: LoginRequest) -> str:
        """
        Authenticate and return a signed JWT.
        Unknown email and wrong password fail identically.
        """
        email = login_data.email.strip()
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if not user or not verify_password(login_data.password, user.hashed_password):
            logger.warning("login_failed", email=email)
            record_auth_attempt("login", "invalid")
            raise AuthError(INVALID_CREDENTIALS)

        token = create_access_token(self.settings, subject=str(user.id), email=user.email)
        logger.info("user_logged_in", user_id=user.id)
        record_auth_attempt("login", "success")
        return token
