"""
Service providers for route dependencies.

Each request gets services built from its own session and the settings
object; tests swap either one through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from music_booking.core.config import Settings, get_settings
from music_booking.db.session import get_db
from music_booking.services.auth_service import AuthService
from music_booking.services.booking_service import BookingService
from music_booking.services.catalog_service import CatalogService


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_catalog_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CatalogService:
    return CatalogService(db, settings)


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> BookingService:
    return BookingService(db, settings)
