"""Health Route — status code follows the probe verdict."""

import pytest

REQUIRED = {
    "NEXT_PUBLIC_CLERK_PUBLISHABLE_KEY": "pk_test_fake",
    "CLERK_SECRET_KEY": "sk_test_fake",
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
}


@pytest.fixture
def full_env(monkeypatch):
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)


async def test_healthy_is_200(client, full_env):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["overall_status"] == "healthy"
    assert body["database"]["connected"] is True
    assert body["environment"] == "test"


async def test_missing_env_is_503(client, full_env, monkeypatch):
    monkeypatch.delenv("CLERK_SECRET_KEY")
    resp = await client.get("/api/health")
    assert resp.status_code == 503
    body = resp.json()
    assert body["overall_status"] == "unhealthy"
    assert body["env_variables"]["missing"] == ["CLERK_SECRET_KEY"]


async def test_values_never_exposed(client, full_env):
    resp = await client.get("/api/health")
    assert "sk_test_fake" not in resp.text
    assert "pk_test_fake" not in resp.text


async def test_unreachable_database_is_503(client, full_env, monkeypatch):
    import fintrack.infrastructure.database as db_module

    monkeypatch.setattr(db_module, "db_manager", None)
    resp = await client.get("/api/health")
    assert resp.status_code == 503
    assert resp.json()["database"]["connected"] is False


async def test_probe_crash_is_500(client, full_env, monkeypatch):
    async def crash(*args, **kwargs):
        raise RuntimeError("probe exploded")

    monkeypatch.setattr("fintrack.api.routes.health.perform_health_check", crash)
    resp = await client.get("/api/health")
    assert resp.status_code == 500
    body = resp.json()
    assert body["overall_status"] == "error"
    assert body["error"] == {"message": "probe exploded", "name": "RuntimeError"}
    assert body["basic_env_check"]["isValid"] is True
