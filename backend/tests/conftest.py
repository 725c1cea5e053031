"""
Centralized Test Configuration.
"""

import pytest
from datetime import datetime
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from backend.app.main import app
from backend.app.db.session import get_db, Base
from backend.app.models.bike import Bike

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


@pytest.fixture(scope="session", autouse=True)
def apply_overrides():
    """Apply overrides once for the session."""

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield

    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Shared session for fixture data creation
@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


# Calendar anchors: 2024-06-14 is a Friday
FRIDAY = datetime(2024, 6, 14)
SATURDAY = datetime(2024, 6, 15)
MONDAY = datetime(2024, 6, 10)


@pytest.fixture
async def legacy_bike(db_session):
    """Bike priced only by the legacy hourly rate."""
    bike = Bike(
        name="Thunder E-Bike",
        bike_type="electric",
        price_per_hour=10,
        km_limit=20,
        weekend_surge_multiplier=1.0,
        gst_percentage=18.0,
    )
    db_session.add(bike)
    await db_session.commit()
    await db_session.refresh(bike)
    return bike


@pytest.fixture
async def slab_bike(db_session):
    """Bike with hourly and daily slabs and a weekend surge."""
    bike = Bike(
        name="Trail Blazer MTB",
        bike_type="fuel",
        pricing_slabs={
            "hourly": {
                "price": 100, "duration_min": 1, "duration_max": 6,
                "included_km": 20, "extra_km_price": 2,
                "minimum_booking_rule": "min_price", "minimum_value": 150,
            },
            "daily": {
                "price": 600, "duration_min": 6, "duration_max": 24,
                "included_km": 120, "extra_km_price": 3,
                "minimum_booking_rule": "none", "minimum_value": 0,
            },
        },
        weekend_surge_multiplier=1.5,
        gst_percentage=18.0,
    )
    db_session.add(bike)
    await db_session.commit()
    await db_session.refresh(bike)
    return bike


@pytest.fixture
async def tariff_bike(db_session):
    """Bike priced by weekday/weekend hourly tariff."""
    bike = Bike(
        name="Velocity Sport",
        bike_type="fuel",
        weekday_rate=10,
        weekend_rate=20,
        min_booking_hours=2,
        km_limit_per_hour=10,
        excess_km_charge=4,
        gst_percentage=18.0,
    )
    db_session.add(bike)
    await db_session.commit()
    await db_session.refresh(bike)
    return bike
