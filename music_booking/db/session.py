"""
Async engine and per-request session dependency.

The engine's connection pool is the only state shared between requests.
Services commit their own writes; this dependency only rolls back when a
request fails half way.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from music_booking.core.config import Settings, get_settings


def build_engine(settings: Settings):
    if settings.DATABASE_URL.startswith("sqlite"):
        # SQLite dialects pick their own pool class and reject sizing options
        return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


engine = build_engine(get_settings())
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
