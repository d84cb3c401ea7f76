"""Dashboard Routes — combined sections and transaction history."""

from sqlalchemy import select

from fintrack.models.user import User
from tests.factories import as_user, insert_transaction, utc


async def _account_with_transactions(client, test_db):
    created = await client.post(
        "/api/v1/accounts", json={"name": "Main", "balance": "250.00"}, headers=as_user(),
    )
    account = created.json()
    user = await test_db.scalar(select(User).where(User.external_user_id == "user_2abc"))
    await insert_transaction(test_db, user.id, account["id"], "20.00", utc(2026, 4, 1))
    await insert_transaction(test_db, user.id, account["id"], "35.10", utc(2026, 4, 2))
    return account


async def test_dashboard_returns_both_sections(client, test_db):
    await _account_with_transactions(client, test_db)

    resp = await client.get("/api/v1/dashboard", headers=as_user())

    assert resp.status_code == 200
    body = resp.json()
    assert body["accounts"]["error"] is None
    assert body["accounts"]["data"][0]["transaction_count"] == 2
    assert [t["amount"] for t in body["transactions"]["data"]] == [35.1, 20.0]


async def test_dashboard_for_new_user_is_empty(client):
    resp = await client.get("/api/v1/dashboard", headers=as_user())
    body = resp.json()
    assert body["accounts"] == {"data": [], "error": None}
    assert body["transactions"] == {"data": [], "error": None}


async def test_dashboard_unauthenticated_reports_section_errors(client):
    resp = await client.get("/api/v1/dashboard")
    assert resp.status_code == 200
    body = resp.json()
    assert body["accounts"]["data"] is None
    assert body["accounts"]["error"]["code"] == "UNAUTHENTICATED"
    assert body["transactions"]["error"]["message"] == "Failed to get dashboard data: Unauthorized"


async def test_transactions_route_most_recent_first(client, test_db):
    account = await _account_with_transactions(client, test_db)

    resp = await client.get("/api/v1/dashboard/transactions", headers=as_user())

    assert resp.status_code == 200
    txs = resp.json()
    assert [t["date"][:10] for t in txs] == ["2026-04-02", "2026-04-01"]
    assert all(t["account_id"] == account["id"] for t in txs)


async def test_transactions_route_unauthenticated_is_401(client):
    resp = await client.get("/api/v1/dashboard/transactions")
    assert resp.status_code == 401
