"""
Request middleware: logging with request IDs, the last-resort error
boundary, and per-path rate limiting.
"""

import time
import uuid

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from music_booking.api.error_handlers import error_response, unexpected_error_response
from music_booking.core.config import Settings
from music_booking.core.logging import get_logger
from music_booking.core.metrics import rate_limited_requests
from music_booking.services.cache_service import get_redis
from music_booking.services.rate_limiter import FixedWindowRateLimiter

logger = get_logger(__name__)

RATE_LIMIT_EXEMPT_PATHS = frozenset({"/", "/health", "/metrics", "/docs", "/redoc", "/openapi.json"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    1. Assigns a unique request ID to each request
    2. Logs request method, path, status code, and duration
    3. Turns any exception that escaped the route handlers into a 500 envelope
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.exception(
                "request_failed",
                error=str(e),
                duration_ms=duration_ms,
            )
            response = unexpected_error_response(e, self.settings)
        else:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window limit per request path; excess requests get a 429 envelope."""

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings
        self.limiter = FixedWindowRateLimiter(
            limit=settings.RATE_LIMIT_REQUESTS,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if not self.settings.RATE_LIMIT_ENABLED or path in RATE_LIMIT_EXEMPT_PATHS:
            return await call_next(request)

        decision = await self.limiter.hit(path, await get_redis(self.settings))
        if not decision.allowed:
            logger.warning("rate_limited", retry_after=decision.retry_after)
            rate_limited_requests.inc()
            return error_response(
                status.HTTP_429_TOO_MANY_REQUESTS,
                "Too many requests. Please try again later.",
                headers={"Retry-After": str(decision.retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
