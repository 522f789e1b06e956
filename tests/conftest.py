"""Root conftest — shared test configuration and an in-memory document store.

Invariants:
    - Environment is set before events_api.config is first imported
    - Every test gets a fresh in-memory SQLite database shared by all its sessions
"""

import os

TEST_JWT_SECRET = "test-secret-key-for-events-api-suite-0123456789"

os.environ.setdefault("AUTH_JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("USE_LOCAL_STORE", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from events_api.db.base import Base  # noqa: E402
from events_api.db.session import create_schema  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    await create_schema(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
