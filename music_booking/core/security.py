"""
Password hashing and JWT helpers, plus the bearer-token dependency used by
protected routes.

Passwords are hashed with passlib's salted pbkdf2_sha256 scheme. Tokens are
HS256 JWTs carrying ``sub`` (user id), ``email``, ``iss``, ``aud``, ``iat``
and ``exp`` claims; all of them are checked on the way back in.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from music_booking.core.config import Settings, get_settings
from music_booking.core.errors import AuthError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value isn't a hash passlib recognises
        return False


def create_access_token(
    settings: Settings,
    subject: str,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {
        "sub": subject,
        "email": email,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """Verify signature, expiry, issuer and audience. Raises AuthError."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as exc:
        raise AuthError("Invalid or expired token.") from exc


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> int:
    if credentials is None:
        raise AuthError("Not authenticated.")

    payload = decode_access_token(settings, credentials.credentials)
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthError("Invalid or expired token.") from exc
