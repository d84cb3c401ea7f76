"""User Route — lazy provisioning of the calling user."""

from tests.factories import as_user


async def test_first_call_provisions_user(client):
    resp = await client.get("/api/v1/users/me", headers=as_user())
    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "user_2abc@example.com"
    assert body["name"] == "Ada Lovelace"
    assert body["image_url"] == ""


async def test_repeated_calls_return_same_user(client):
    first = await client.get("/api/v1/users/me", headers=as_user())
    second = await client.get("/api/v1/users/me", headers=as_user())
    assert first.json()["id"] == second.json()["id"]


async def test_unauthenticated_is_401(client):
    resp = await client.get("/api/v1/users/me")
    assert resp.status_code == 401


async def test_identity_without_email_is_404(client):
    resp = await client.get("/api/v1/users/me", headers=as_user(**{"X-Test-Email": "-"}))
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "USER_NOT_FOUND"
