"""Shared test fixtures."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./slotkeeper-test.db")
os.environ.setdefault("LOGFIRE_TOKEN", "")

from datetime import datetime, timezone

import logfire
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from slotkeeper.api.deps import get_now
from slotkeeper.database import Base, enable_sqlite_foreign_keys, get_db
from slotkeeper.main import app
from slotkeeper.models import User
from slotkeeper.scheduling.availability import AvailabilityConfig, Weekday, get_availability

logfire.configure(send_to_logfire=False, console=False)

WEEKDAYS = frozenset(
    {Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY}
)

# Saturday before the scenario week
FIXED_NOW = datetime(2024, 6, 1, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def config() -> AvailabilityConfig:
    """Mon-Fri, 8:00-18:00, 20 minute slots, UTC."""
    return AvailabilityConfig(
        available_weekdays=WEEKDAYS,
        business_start_hour=8,
        business_end_hour=18,
        slot_duration_minutes=20,
        timezone="UTC",
    )


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite file database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'slotkeeper.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def user(session_factory) -> User:
    """A committed user to book appointments for."""
    async with session_factory() as session:
        user = User(email="ana@example.com", name="Ana")
        session.add(user)
        await session.commit()
        return user


@pytest.fixture
async def other_user(session_factory) -> User:
    async with session_factory() as session:
        user = User(email="bo@example.com", name="Bo")
        session.add(user)
        await session.commit()
        return user


@pytest.fixture
async def client(session_factory, config):
    """API client wired to the test database, clock and availability."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    app.dependency_overrides[get_availability] = lambda: config

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
