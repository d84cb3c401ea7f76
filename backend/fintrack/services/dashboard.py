"""Dashboard Queries — accounts with transaction counts and transaction history.

Invariants:
    - Both reads require an existing user (require_user); neither provisions
    - Accounts ordered by created_at desc; transactions by date desc
    - Empty results are empty lists, never errors
    - Every returned row went through serialize_record
    - get_dashboard isolates section failures: one failed section never hides
      the other

Design Decisions:
    - Transaction counts come from one grouped subquery joined to accounts,
      not one COUNT per account
    - Transactions are filtered by the denormalized user_id (no account join)
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.domain_types import ExternalIdentity
from fintrack.core.errors import FintrackError
from fintrack.core.serialization import serialize_record
from fintrack.models.account import Account
from fintrack.models.transaction import Transaction
from fintrack.services.operation_boundary import operation_boundary
from fintrack.services.resolve_identity import require_user

logger = logging.getLogger(__name__)


async def list_accounts(db: AsyncSession, identity: ExternalIdentity | None) -> list[dict]:
    """Every account of the caller, newest first, with its transaction count."""
    async with operation_boundary("Failed to get user accounts"):
        owner = await require_user(db, identity)

        counts = (
            select(
                Transaction.account_id.label("account_id"),
                func.count(Transaction.id).label("transaction_count"),
            )
            .group_by(Transaction.account_id)
            .subquery()
        )
        result = await db.execute(
            select(Account, func.coalesce(counts.c.transaction_count, 0))
            .outerjoin(counts, counts.c.account_id == Account.id)
            .where(Account.user_id == owner.id)
            .order_by(Account.created_at.desc()),
        )
        rows = result.all()

    logger.info(
        "Fetched accounts",
        extra={"user_id": str(owner.id), "count": len(rows)},
    )
    return [
        serialize_record({**account.to_dict(), "transaction_count": int(count)})
        for account, count in rows
    ]


async def list_recent_transactions(
    db: AsyncSession, identity: ExternalIdentity | None,
) -> list[dict]:
    """Every transaction owned by the caller, most recent date first."""
    async with operation_boundary("Failed to get dashboard data"):
        owner = await require_user(db, identity)
        result = await db.execute(
            select(Transaction)
            .where(Transaction.user_id == owner.id)
            .order_by(Transaction.date.desc()),
        )
        transactions = result.scalars().all()

    logger.info(
        "Fetched transactions",
        extra={"user_id": str(owner.id), "count": len(transactions)},
    )
    return [serialize_record(t.to_dict()) for t in transactions]


async def get_dashboard(db: AsyncSession, identity: ExternalIdentity | None) -> dict:
    """Both dashboard sections; a failed section carries an inline error."""
    return {
        "accounts": await _section(db, list_accounts(db, identity)),
        "transactions": await _section(db, list_recent_transactions(db, identity)),
    }


async def _section(db: AsyncSession, fetch) -> dict:
    try:
        return {"data": await fetch, "error": None}
    except FintrackError as e:
        # Reset a failed transaction so the next section can still read
        await db.rollback()
        return {"data": None, "error": {"code": e.code, "message": e.message}}
