"""
Centralized Test Configuration.
"""

import random

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from tracker.app.db.session import init_db
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate
from tracker.app.services.parcel_service import rfc3339_now
from tracker.app.services.parcel_store import ParcelStore

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Fresh in-memory database per test, schema created up front."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(bind=test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine):
    TestingSessionLocal = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def store(db_session):
    return ParcelStore(db_session)


@pytest.fixture
def rng():
    """Locally seeded randomness so tests never share random state."""
    return random.Random(20241019)


@pytest.fixture
def make_parcel():
    def _make(client: int = 1000, address: str = "test") -> ParcelCreate:
        return ParcelCreate(
            client=client,
            status=ParcelStatus.REGISTERED.value,
            address=address,
            created_at=rfc3339_now(),
        )
    return _make
