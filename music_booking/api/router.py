"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from music_booking.api.routes import auth, artists, events, bookings

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(artists.router)
api_router.include_router(events.router)
api_router.include_router(bookings.router)
