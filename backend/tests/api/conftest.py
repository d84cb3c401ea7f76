"""API test fixtures — FastAPI test client over the in-memory DB.

Invariants:
    - get_db overridden to use the test session factory
    - db_manager patched for the health probe, which bypasses get_db
    - Identity comes from the X-Test-User header (absent = unauthenticated);
      X-Test-Email overrides the email, "-" meaning no email at all
    - Each test gets its own ViewCache and Settings

Design Decisions:
    - ASGITransport does not run the lifespan: every collaborator the lifespan
      would configure is injected through dependency_overrides instead
"""

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

import fintrack.infrastructure.database as db_module
from fintrack.api.dependencies import get_identity_provider, get_view_cache
from fintrack.config import Settings, get_settings
from fintrack.core.domain_types import ExternalIdentity
from fintrack.infrastructure.database import DatabaseSessionManager, get_db
from fintrack.infrastructure.view_cache import ViewCache
from fintrack.main import app
from tests.factories import make_identity


class HeaderIdentityProvider:
    async def current_identity(self, request: Request) -> ExternalIdentity | None:
        external_user_id = request.headers.get("x-test-user")
        if not external_user_id:
            return None
        email = request.headers.get("x-test-email", f"{external_user_id}@example.com")
        return make_identity(external_user_id, email=None if email == "-" else email)


@pytest.fixture
def view_cache():
    return ViewCache()


@pytest.fixture
def settings():
    return Settings(environment="test", enable_seed=True)


@pytest.fixture
async def client(test_engine, test_session_factory, view_cache, settings):
    """FastAPI test client with DB, identity, cache and settings overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = HeaderIdentityProvider
    app.dependency_overrides[get_view_cache] = lambda: view_cache
    app.dependency_overrides[get_settings] = lambda: settings

    # Health probe reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
