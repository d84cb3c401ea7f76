"""Database Session Manager — liveness probe and unit-of-work semantics."""

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError

from fintrack.core.errors import StorageFailure
from fintrack.infrastructure.database import DatabaseSessionManager, unit_of_work
from fintrack.models.user import User
from tests.factories import make_identity


@pytest.fixture
async def manager(tmp_path):
    m = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'probe.db'}")
    yield m
    await m.dispose()


async def test_probe_connected(manager):
    assert await manager.probe() == {"connected": True, "error": None}


async def test_probe_reports_failure_without_raising(manager, monkeypatch):
    async def broken_execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr("sqlalchemy.ext.asyncio.AsyncSession.execute", broken_execute)

    result = await manager.probe()

    assert result["connected"] is False
    assert result["error"]["name"] == "StorageFailure"
    assert "operational" in result["error"]["message"]


async def test_session_maps_sqlalchemy_errors_to_storage_failure(manager):
    with pytest.raises(StorageFailure) as exc:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.http_status == 503


def _user(external_id: str, email: str) -> User:
    identity = make_identity(external_id, email=email)
    return User(external_user_id=identity.external_user_id, name="Ada", email=email)


async def test_unit_of_work_commits_on_success(test_db, test_session_factory):
    async with unit_of_work(test_db):
        test_db.add(_user("user_a", "a@example.com"))

    async with test_session_factory() as other:
        found = await other.scalar(select(User).where(User.external_user_id == "user_a"))
    assert found is not None


async def test_unit_of_work_rolls_back_on_error(test_db):
    with pytest.raises(ValueError):
        async with unit_of_work(test_db):
            test_db.add(_user("user_b", "b@example.com"))
            await test_db.flush()
            raise ValueError("abort")

    found = await test_db.scalar(select(User).where(User.external_user_id == "user_b"))
    assert found is None
