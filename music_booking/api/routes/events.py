"""
Event endpoints. Both require a bearer token.
"""

from fastapi import APIRouter, Depends

from music_booking.api.deps import get_catalog_service
from music_booking.core.config import Settings, get_settings
from music_booking.core.logging import get_logger
from music_booking.core.security import get_current_user_id
from music_booking.schemas.common import Result, success
from music_booking.schemas.event import EventCreate, EventResponse
from music_booking.services.cache_service import EVENT_LIST_KEY, get_cached_list, invalidate, set_cached_list
from music_booking.services.catalog_service import CatalogService

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"], dependencies=[Depends(get_current_user_id)])


@router.get("", response_model=Result[list[EventResponse]])
async def list_events_endpoint(
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_settings),
):
    """
    List every event with its artist attached.
    Cached in Redis; creating an event invalidates the cache.
    """
    cached = await get_cached_list(settings, EVENT_LIST_KEY)
    if cached is not None:
        logger.info("events_list_cache_hit")
        return success(cached, "All events")

    events = await service.list_events()
    content = [EventResponse.model_validate(e).model_dump(mode="json", by_alias=True) for e in events]
    await set_cached_list(settings, EVENT_LIST_KEY, content)
    return success(content, "All events")


@router.post("", response_model=Result[None])
async def create_event_endpoint(
    event_data: EventCreate,
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_settings),
):
    """Schedule an event; only the new resource path is returned."""
    event = await service.create_event(event_data)
    await invalidate(settings, EVENT_LIST_KEY)
    return success(description=f"/api/events/{event.id}")
