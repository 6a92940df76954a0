"""
Fixed-window rate limiting partitioned by request path.

Each path gets at most `limit` requests per `window_seconds`; the window
restarts on boundaries of the wall clock (floor(now / window)).

With Redis available, counters live there (INCR + EXPIRE) so every API
worker shares them. Without Redis, or when a Redis call fails, each process
counts on its own. The limiter fails open: it never rejects a request
because its backing store broke.
"""

import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from music_booking.core.logging import get_logger

logger = get_logger(__name__)

# Stale windows are swept once the local table grows past this many paths
_SWEEP_THRESHOLD = 1024


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int


class FixedWindowRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        if limit < 1 or window_seconds < 1:
            raise ValueError("limit and window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._counters: dict[str, tuple[int, int]] = {}

    def _window(self) -> tuple[int, int]:
        now = self._clock()
        index = int(now // self.window_seconds)
        retry_after = max(1, math.ceil((index + 1) * self.window_seconds - now))
        return index, retry_after

    def _decide(self, count: int, retry_after: int) -> RateLimitDecision:
        return RateLimitDecision(
            allowed=count <= self.limit,
            remaining=max(self.limit - count, 0),
            retry_after=retry_after,
        )

    def hit_local(self, partition: str) -> RateLimitDecision:
        index, retry_after = self._window()
        window, count = self._counters.get(partition, (index, 0))
        count = count + 1 if window == index else 1
        self._counters[partition] = (index, count)

        if len(self._counters) > _SWEEP_THRESHOLD:
            self._counters = {
                key: value for key, value in self._counters.items() if value[0] == index
            }
        return self._decide(count, retry_after)

    async def hit(self, partition: str, client: Optional[redis.Redis] = None) -> RateLimitDecision:
        if client is None:
            return self.hit_local(partition)

        index, retry_after = self._window()
        key = f"ratelimit:{partition}:{index}"
        try:
            count = await client.incr(key)
            if count == 1:
                await client.expire(key, self.window_seconds)
        except RedisError as e:
            logger.warning("rate_limit_redis_error", error=str(e))
            return self.hit_local(partition)
        return self._decide(count, retry_after)
