"""
Artist endpoints. Open to anonymous clients.
"""

from fastapi import APIRouter, Depends

from music_booking.api.deps import get_catalog_service
from music_booking.core.config import Settings, get_settings
from music_booking.core.logging import get_logger
from music_booking.schemas.artist import ArtistCreate, ArtistResponse
from music_booking.schemas.common import Result, success
from music_booking.services.cache_service import (
    ARTIST_LIST_KEY,
    EVENT_LIST_KEY,
    get_cached_list,
    invalidate,
    set_cached_list,
)
from music_booking.services.catalog_service import CatalogService

logger = get_logger(__name__)
router = APIRouter(prefix="/artists", tags=["Artists"])


@router.get("", response_model=Result[list[ArtistResponse]])
async def list_artists_endpoint(
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_settings),
):
    """List every artist. Served from Redis when cached."""
    cached = await get_cached_list(settings, ARTIST_LIST_KEY)
    if cached is not None:
        logger.info("artists_list_cache_hit")
        return success(cached, "All artists")

    artists = await service.list_artists()
    content = [ArtistResponse.model_validate(a).model_dump(mode="json", by_alias=True) for a in artists]
    await set_cached_list(settings, ARTIST_LIST_KEY, content)
    return success(content, "All artists")


@router.get("/{artist_id}", response_model=Result[ArtistResponse])
async def get_artist_endpoint(artist_id: int, service: CatalogService = Depends(get_catalog_service)):
    artist = await service.get_artist(artist_id)
    return success(ArtistResponse.model_validate(artist))


@router.post("", response_model=Result[ArtistResponse])
async def create_artist_endpoint(
    artist_data: ArtistCreate,
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_settings),
):
    """Create an artist; the description carries the new resource path."""
    artist = await service.create_artist(artist_data)
    await invalidate(settings, ARTIST_LIST_KEY)
    # cached events embed their artist, and may reference this id already
    await invalidate(settings, EVENT_LIST_KEY)
    return success(ArtistResponse.model_validate(artist), f"/api/artists/{artist.id}")
