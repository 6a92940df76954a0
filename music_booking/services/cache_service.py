"""
Redis caching for the artist and event listings.

What we cache:
  - The serialized content of GET /api/artists and GET /api/events
  - One key per listing ("artists:list", "events:list"); neither listing is
    paginated or filtered, so there is nothing else to key on

Invalidation:
  - Creating an artist deletes "artists:list" and "events:list" (events
    embed their artist)
  - Creating an event deletes "events:list"
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Redis is optional. When it is disabled or unreachable every call here is a
no-op and the routes fall through to the database.
"""

import json
import time
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from music_booking.core.config import Settings
from music_booking.core.logging import get_logger
from music_booking.core.metrics import record_cache_operation, redis_circuit_breaker_open

logger = get_logger(__name__)

ARTIST_LIST_KEY = "artists:list"
EVENT_LIST_KEY = "events:list"

_redis_client: Optional[redis.Redis] = None
# Monotonic deadline before which a failed Redis is not contacted again
_redis_down_until: float = 0.0


async def get_redis(settings: Settings) -> Optional[redis.Redis]:
    """
    Get or create the Redis connection. Returns None if Redis is disabled or down.

    Circuit breaker: after a failed connect, further calls return None
    without reconnecting for REDIS_RETRY_SECONDS, so an outage costs one
    connect timeout per period instead of one per request.
    """
    global _redis_client, _redis_down_until

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is not None:
        return _redis_client

    if time.monotonic() < _redis_down_until:
        return None

    client = redis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        _redis_down_until = time.monotonic() + settings.REDIS_RETRY_SECONDS
        logger.error("redis_connection_failed", error=str(e), retry_in=settings.REDIS_RETRY_SECONDS)
        redis_circuit_breaker_open.set(1)
        await client.aclose()
        return None

    _redis_client = client
    _redis_down_until = 0.0
    redis_circuit_breaker_open.set(0)
    logger.info("redis_connected", url=settings.REDIS_URL)
    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def get_cached_list(settings: Settings, key: str) -> Optional[list[dict[str, Any]]]:
    client = await get_redis(settings)
    if not client:
        return None

    try:
        data = await client.get(key)
    except RedisError as e:
        logger.error("cache_get_error", key=key, error=str(e))
        record_cache_operation("get", "error")
        return None

    if data is None:
        logger.debug("cache_miss", key=key)
        record_cache_operation("get", "miss")
        return None

    logger.debug("cache_hit", key=key)
    record_cache_operation("get", "hit")
    return json.loads(data)


async def set_cached_list(settings: Settings, key: str, data: list[dict[str, Any]]) -> None:
    client = await get_redis(settings)
    if not client:
        return

    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
    except RedisError as e:
        logger.error("cache_set_error", key=key, error=str(e))
        record_cache_operation("set", "error")
        return
    logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    record_cache_operation("set", "ok")


async def invalidate(settings: Settings, key: str) -> None:
    client = await get_redis(settings)
    if not client:
        return

    try:
        deleted = await client.delete(key)
    except RedisError as e:
        logger.error("cache_invalidation_error", key=key, error=str(e))
        record_cache_operation("invalidate", "error")
        return
    logger.info("cache_invalidated", key=key, keys_deleted=deleted)
    record_cache_operation("invalidate", "ok")


async def get_cache_stats(settings: Settings) -> dict:
    """Redis cache statistics for the health endpoint."""
    client = await get_redis(settings)
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
    except RedisError as e:
        return {"status": "error", "error": str(e)}

    hits = info.get("keyspace_hits", 0)
    misses = info.get("keyspace_misses", 0)
    return {
        "status": "connected",
        "hits": hits,
        "misses": misses,
        "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
    }
