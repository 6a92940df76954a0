"""
Booking endpoints. Both require a bearer token.
"""

from fastapi import APIRouter, Depends

from music_booking.api.deps import get_booking_service
from music_booking.core.security import get_current_user_id
from music_booking.schemas.booking import BookingCreate, BookingResponse
from music_booking.schemas.common import Result, success
from music_booking.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"], dependencies=[Depends(get_current_user_id)])


@router.post("", response_model=Result[None])
async def create_booking_endpoint(
    booking_data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Book a ticket for an event. The booking starts (and stays) "Pending";
    its date is set by the server.
    """
    booking = await service.create_booking(booking_data)
    return success(description=f"/api/bookings/{booking.id}")


@router.get("/{user_id}", response_model=Result[list[BookingResponse]])
async def list_user_bookings(user_id: int, service: BookingService = Depends(get_booking_service)):
    """All bookings for the given user, each with its event."""
    bookings = await service.list_bookings_by_user(user_id)
    return success([BookingResponse.model_validate(b) for b in bookings], "All bookings")
