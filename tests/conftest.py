"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh in-memory SQLite database. Redis and rate limiting
are switched off through the environment before the app is imported; the
redis_cache fixture turns the listing cache back on over fakeredis.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import AsyncGenerator

import pytest_asyncio
from fakeredis import FakeAsyncRedis
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from music_booking.main import app
from music_booking.core.config import Settings, get_settings
from music_booking.core.security import create_access_token, hash_password
from music_booking.db.base import Base
from music_booking.db.session import get_db
from music_booking.models import Artist, Event, User
from music_booking.services import cache_service

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables on a private in-memory database and yield a session."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    user = User(
        email="test@example.com",
        first_name="Test",
        last_name="User",
        hashed_password=hash_password("testpassword123"),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def auth_token(test_user: User) -> str:
    return create_access_token(get_settings(), subject=str(test_user.id), email=test_user.email)


@pytest_asyncio.fixture
async def auth_headers(auth_token: str) -> dict:
    return {"Authorization": f"Bearer {auth_token}"}


@pytest_asyncio.fixture
async def test_artist(db_session: AsyncSession) -> Artist:
    artist = Artist(name="The Testers", genre="Rock", bio="A test band", email="band@example.com")
    db_session.add(artist)
    await db_session.commit()
    await db_session.refresh(artist)
    return artist


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession, test_artist: Artist) -> Event:
    event = Event(
        artist_id=test_artist.id,
        title="Test Concert",
        date=datetime.now(timezone.utc) + timedelta(days=30),
        venue="Test Venue",
        ticket_price=Decimal("25.50"),
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def redis_cache(client: AsyncClient, monkeypatch) -> AsyncGenerator[FakeAsyncRedis, None]:
    """Turn the listing cache on for one test, backed by an in-process fake Redis."""
    fake = FakeAsyncRedis(decode_responses=True)
    await fake.flushall()
    monkeypatch.setattr(cache_service, "_redis_client", fake)
    monkeypatch.setattr(cache_service, "_redis_down_until", 0.0)
    app.dependency_overrides[get_settings] = lambda: Settings(REDIS_ENABLED=True)

    yield fake

    app.dependency_overrides.pop(get_settings, None)
    await fake.aclose()
