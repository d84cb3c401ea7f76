"""Root conftest — shared test configuration and in-memory DB fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database (schema from Base.metadata)
    - Tests never see real identity-provider keys or a real database URL
"""

import os

# Ensure tests don't accidentally use real credentials or a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("CLERK_SECRET_KEY", "sk_test_fake")
os.environ.setdefault("IDENTITY_JWT_KEY", "test-secret")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from fintrack.db.base import Base  # noqa: E402
import fintrack.models  # noqa: E402,F401
from tests.factories import make_identity, insert_user  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
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


@pytest.fixture
def identity():
    return make_identity()


@pytest.fixture
async def seed_user(test_db, identity):
    """The default identity's user row, inserted directly."""
    return await insert_user(test_db, identity)
