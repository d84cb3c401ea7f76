"""Account Service — account creation under the one-default-per-user invariant.

Invariants:
    - The owner's users row is locked (SELECT ... FOR UPDATE) before counting, so
      concurrent creations for one user are serialized by the database
    - Clearing sibling defaults and inserting the new account commit together or
      not at all; no reader ever sees two defaults
    - The partial unique index uq_accounts_one_default_per_user rejects any
      second default that slips past the lock (e.g. on SQLite)
    - The dashboard view is revalidated only after a successful commit
    - Every failure surfaces as "Failed to create account: <cause>"
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.default_account import parse_balance, resolve_effective_default
from fintrack.core.domain_types import ExternalIdentity, UserId
from fintrack.core.repository_protocols import ViewInvalidator
from fintrack.core.serialization import serialize_record
from fintrack.infrastructure.database import unit_of_work
from fintrack.infrastructure.view_cache import DASHBOARD_PATH
from fintrack.models.account import Account
from fintrack.models.user import User
from fintrack.schemas.account import AccountCreate
from fintrack.services.operation_boundary import operation_boundary
from fintrack.services.resolve_identity import require_user

logger = logging.getLogger(__name__)


async def create_account(
    db: AsyncSession,
    identity: ExternalIdentity | None,
    payload: AccountCreate,
    invalidator: ViewInvalidator,
) -> dict:
    """Create an account; the first one per user is always the default."""
    async with operation_boundary("Failed to create account"):
        owner = await require_user(db, identity)
        balance = parse_balance(payload.balance)

        async with unit_of_work(db):
            await db.execute(
                select(User.id).where(User.id == owner.id).with_for_update(),
            )
            existing = await db.scalar(
                select(func.count(Account.id)).where(Account.user_id == owner.id),
            )
            is_default = resolve_effective_default(existing or 0, payload.is_default)

            if is_default:
                await db.execute(
                    update(Account)
                    .where(Account.user_id == owner.id)
                    .where(Account.is_default.is_(True))
                    .values(is_default=False),
                )

            account = Account(
                user_id=owner.id,
                name=payload.name,
                type=payload.type.value,
                balance=balance,
                is_default=is_default,
            )
            db.add(account)
            await db.flush()

    invalidator.revalidate_path(DASHBOARD_PATH)
    logger.info(
        "Account created",
        extra={
            "user_id": str(owner.id),
            "account_id": str(account.id),
            "count": (existing or 0) + 1,
        },
    )
    return serialize_record(account.to_dict())


async def get_default_account(db: AsyncSession, user_id: UserId) -> Account | None:
    result = await db.execute(
        select(Account)
        .where(Account.user_id == user_id)
        .where(Account.is_default.is_(True)),
    )
    return result.scalar_one_or_none()
