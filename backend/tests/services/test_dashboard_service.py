"""Dashboard Queries — ordering, counts, serialization and partial failure.

Tests cover:
    - list_accounts: newest first, transaction_count per account, empty list
    - list_recent_transactions: owner-scoped, date desc, amounts as floats
    - Both fail with prefixed Unauthenticated / UserNotFound
    - get_dashboard reports a failed section inline
"""

import pytest

from fintrack.core.domain_types import AccountType, TransactionType
from fintrack.core.errors import StorageFailure, Unauthenticated, UserNotFound
from fintrack.schemas.account import AccountCreate
from fintrack.services import dashboard as dashboard_service
from fintrack.services.accounts import create_account
from fintrack.services.dashboard import (
    get_dashboard, list_accounts, list_recent_transactions,
)
from tests.factories import insert_transaction, insert_user, make_identity, utc


class NullInvalidator:
    def revalidate_path(self, path: str) -> None:
        pass


async def _create(db, identity, name, balance="100.00", is_default=False):
    return await create_account(
        db, identity,
        AccountCreate(name=name, balance=balance, is_default=is_default, type=AccountType.CURRENT),
        NullInvalidator(),
    )


async def test_list_accounts_empty_for_new_user(test_db, seed_user, identity):
    assert await list_accounts(test_db, identity) == []


async def test_example_scenario_orders_newest_first(test_db, seed_user, identity):
    await _create(test_db, identity, "A", "100.00")
    await _create(test_db, identity, "B", "50", is_default=True)

    accounts = await list_accounts(test_db, identity)

    assert [a["name"] for a in accounts] == ["B", "A"]
    assert [a["is_default"] for a in accounts] == [True, False]
    assert accounts[0]["balance"] == 50.0
    assert accounts[1]["balance"] == 100.0


async def test_list_accounts_includes_transaction_counts(test_db, seed_user, identity):
    a = await _create(test_db, identity, "A")
    b = await _create(test_db, identity, "B")
    for day in (1, 2, 3):
        await insert_transaction(test_db, seed_user.id, a["id"], "10.00", utc(2026, 1, day))

    counts = {acc["name"]: acc["transaction_count"] for acc in await list_accounts(test_db, identity)}
    assert counts == {"A": 3, "B": 0}
    assert b["id"] is not None


async def test_list_accounts_scoped_to_owner(test_db, seed_user, identity):
    other = make_identity("user_other", email="other@example.com")
    await insert_user(test_db, other)
    await _create(test_db, other, "Theirs")
    await _create(test_db, identity, "Mine")

    assert [a["name"] for a in await list_accounts(test_db, identity)] == ["Mine"]


async def test_list_recent_transactions_empty(test_db, seed_user, identity):
    assert await list_recent_transactions(test_db, identity) == []


async def test_list_recent_transactions_orders_by_date_desc(test_db, seed_user, identity):
    acc = await _create(test_db, identity, "Main")
    await insert_transaction(test_db, seed_user.id, acc["id"], "12.50", utc(2026, 3, 1))
    await insert_transaction(
        test_db, seed_user.id, acc["id"], "2000.00", utc(2026, 3, 15),
        tx_type=TransactionType.INCOME, category="salary",
    )
    await insert_transaction(test_db, seed_user.id, acc["id"], "0", utc(2026, 2, 1))

    txs = await list_recent_transactions(test_db, identity)

    assert [t["amount"] for t in txs] == [2000.0, 12.5, 0.0]
    assert all(isinstance(t["amount"], float) for t in txs)
    assert txs[0]["type"] == "INCOME"


async def test_list_recent_transactions_spans_accounts(test_db, seed_user, identity):
    a = await _create(test_db, identity, "A")
    b = await _create(test_db, identity, "B")
    await insert_transaction(test_db, seed_user.id, a["id"], "1.00", utc(2026, 1, 1))
    await insert_transaction(test_db, seed_user.id, b["id"], "2.00", utc(2026, 1, 2))

    txs = await list_recent_transactions(test_db, identity)
    assert {t["account_id"] for t in txs} == {a["id"], b["id"]}


async def test_reads_require_identity(test_db):
    with pytest.raises(Unauthenticated) as exc:
        await list_accounts(test_db, None)
    assert exc.value.message == "Failed to get user accounts: Unauthorized"

    with pytest.raises(Unauthenticated) as exc:
        await list_recent_transactions(test_db, None)
    assert exc.value.message == "Failed to get dashboard data: Unauthorized"


async def test_reads_require_existing_user(test_db, identity):
    with pytest.raises(UserNotFound):
        await list_accounts(test_db, identity)
    with pytest.raises(UserNotFound):
        await list_recent_transactions(test_db, identity)


async def test_dashboard_both_sections(test_db, seed_user, identity):
    acc = await _create(test_db, identity, "Main")
    await insert_transaction(test_db, seed_user.id, acc["id"], "5.00", utc(2026, 1, 1))

    result = await get_dashboard(test_db, identity)

    assert result["accounts"]["error"] is None
    assert [a["name"] for a in result["accounts"]["data"]] == ["Main"]
    assert result["transactions"]["error"] is None
    assert len(result["transactions"]["data"]) == 1


async def test_dashboard_isolates_failed_section(test_db, seed_user, identity, monkeypatch):
    await _create(test_db, identity, "Main")

    async def broken(db, identity):
        raise StorageFailure("Connection or operational error", "execute").with_prefix(
            "Failed to get dashboard data",
        )

    monkeypatch.setattr(dashboard_service, "list_recent_transactions", broken)

    result = await get_dashboard(test_db, identity)

    assert [a["name"] for a in result["accounts"]["data"]] == ["Main"]
    assert result["transactions"]["data"] is None
    assert result["transactions"]["error"]["code"] == "STORAGE_FAILURE"
    assert result["transactions"]["error"]["message"].startswith("Failed to get dashboard data")


async def test_dashboard_unauthenticated_reports_both_sections(test_db):
    result = await get_dashboard(test_db, None)
    assert result["accounts"]["error"]["code"] == "UNAUTHENTICATED"
    assert result["transactions"]["error"]["code"] == "UNAUTHENTICATED"
