"""
Tests for the Redis listing cache and the connection circuit breaker.
"""

import pytest
from datetime import datetime, timezone, timedelta
from httpx import AsyncClient
from prometheus_client import REGISTRY
from redis.exceptions import ConnectionError as RedisConnectionError, RedisError

from music_booking.core.config import Settings, get_settings
from music_booking.main import app
from music_booking.models import Artist
from music_booking.services import cache_service
from music_booking.services.cache_service import ARTIST_LIST_KEY, EVENT_LIST_KEY


def iso_in(delta: timedelta) -> str:
    return (datetime.now(timezone.utc) + delta).isoformat()


class UnreachableRedis:
    """Stands in for a client whose server refuses connections."""

    def __init__(self):
        self.closed = False

    async def ping(self):
        raise RedisConnectionError("Connection refused")

    async def aclose(self):
        self.closed = True


class BrokenStatsRedis:
    async def info(self, section=None):
        raise RedisError("LOADING Redis is loading the dataset in memory")


@pytest.fixture
def unreachable_redis(monkeypatch) -> list:
    """Every connect attempt builds an UnreachableRedis; the list records them."""
    attempts = []

    def fake_from_url(url, **kwargs):
        attempts.append(UnreachableRedis())
        return attempts[-1]

    monkeypatch.setattr(cache_service.redis, "from_url", fake_from_url)
    monkeypatch.setattr(cache_service, "_redis_client", None)
    monkeypatch.setattr(cache_service, "_redis_down_until", 0.0)
    return attempts


# ==================== Listing cache ====================

@pytest.mark.asyncio
async def test_artist_list_miss_populates_cache(client: AsyncClient, redis_cache, test_artist):
    assert await redis_cache.exists(ARTIST_LIST_KEY) == 0

    response = await client.get("/api/artists")
    assert response.status_code == 200
    assert [a["name"] for a in response.json()["content"]] == ["The Testers"]

    assert await redis_cache.exists(ARTIST_LIST_KEY) == 1
    assert 0 < await redis_cache.ttl(ARTIST_LIST_KEY) <= Settings().REDIS_CACHE_TTL


@pytest.mark.asyncio
async def test_artist_list_hit_skips_database(client: AsyncClient, redis_cache, test_artist, db_session):
    """A row written behind the API's back stays invisible until the key goes."""
    await client.get("/api/artists")

    db_session.add(Artist(name="Side Door", genre="Jazz"))
    await db_session.commit()

    cached = await client.get("/api/artists")
    assert [a["name"] for a in cached.json()["content"]] == ["The Testers"]

    await redis_cache.delete(ARTIST_LIST_KEY)
    fresh = await client.get("/api/artists")
    assert [a["name"] for a in fresh.json()["content"]] == ["The Testers", "Side Door"]


@pytest.mark.asyncio
async def test_create_artist_invalidates_artist_list(client: AsyncClient, redis_cache, test_artist):
    await client.get("/api/artists")
    assert await redis_cache.exists(ARTIST_LIST_KEY) == 1

    created = await client.post("/api/artists", json={"name": "Newcomers", "genre": "Pop"})
    assert created.status_code == 200
    assert await redis_cache.exists(ARTIST_LIST_KEY) == 0

    response = await client.get("/api/artists")
    assert [a["name"] for a in response.json()["content"]] == ["The Testers", "Newcomers"]


@pytest.mark.asyncio
async def test_create_event_invalidates_event_list(client: AsyncClient, redis_cache, auth_headers, test_event):
    first = await client.get("/api/events", headers=auth_headers)
    assert len(first.json()["content"]) == 1
    assert await redis_cache.exists(EVENT_LIST_KEY) == 1

    created = await client.post(
        "/api/events",
        json={"artistId": test_event.artist_id, "title": "Encore", "date": iso_in(timedelta(days=2))},
        headers=auth_headers,
    )
    assert created.status_code == 200
    assert await redis_cache.exists(EVENT_LIST_KEY) == 0

    second = await client.get("/api/events", headers=auth_headers)
    assert [e["title"] for e in second.json()["content"]] == ["Test Concert", "Encore"]


@pytest.mark.asyncio
async def test_create_artist_refreshes_cached_events(client: AsyncClient, redis_cache, auth_headers, db_session):
    """An event listed with artist null picks the artist up once it is created."""
    await client.post(
        "/api/events",
        json={"artistId": 1, "title": "Early Announcement", "date": iso_in(timedelta(days=5))},
        headers=auth_headers,
    )
    before = await client.get("/api/events", headers=auth_headers)
    assert before.json()["content"][0]["artist"] is None
    assert await redis_cache.exists(EVENT_LIST_KEY) == 1

    artist = await client.post("/api/artists", json={"name": "Band", "genre": "Rock"})
    assert artist.json()["content"]["id"] == 1
    assert await redis_cache.exists(EVENT_LIST_KEY) == 0

    # Requests share one session here; in the app each request has its own
    db_session.expire_all()
    after = await client.get("/api/events", headers=auth_headers)
    assert after.json()["content"][0]["artist"]["name"] == "Band"


# ==================== Outages ====================

@pytest.mark.asyncio
async def test_get_redis_backs_off_after_failed_connect(unreachable_redis, monkeypatch):
    settings = Settings(REDIS_ENABLED=True, REDIS_RETRY_SECONDS=30)

    for _ in range(5):
        assert await cache_service.get_redis(settings) is None

    assert len(unreachable_redis) == 1
    assert unreachable_redis[0].closed
    assert REGISTRY.get_sample_value("redis_circuit_breaker_open") == 1.0

    # Once the backoff has elapsed the next call tries again
    monkeypatch.setattr(cache_service, "_redis_down_until", 0.0)
    assert await cache_service.get_redis(settings) is None
    assert len(unreachable_redis) == 2


@pytest.mark.asyncio
async def test_listings_fall_through_when_redis_down(client: AsyncClient, unreachable_redis, test_artist):
    app.dependency_overrides[get_settings] = lambda: Settings(REDIS_ENABLED=True)

    for _ in range(3):
        response = await client.get("/api/artists")
        assert response.status_code == 200
        assert response.json()["content"][0]["name"] == "The Testers"

    assert len(unreachable_redis) == 1


@pytest.mark.asyncio
async def test_cache_stats_disabled_and_error(monkeypatch):
    assert await cache_service.get_cache_stats(Settings(REDIS_ENABLED=False)) == {"status": "disabled"}

    monkeypatch.setattr(cache_service, "_redis_client", BrokenStatsRedis())
    stats = await cache_service.get_cache_stats(Settings(REDIS_ENABLED=True))
    assert stats["status"] == "error"
    assert "LOADING" in stats["error"]
