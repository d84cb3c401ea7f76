"""Seed Transactions — development helper that fills an account with sample history.

Invariants:
    - Replaces the account's existing transactions; never touches other accounts
    - 1-3 COMPLETED transactions per day for the last `days` days
    - Account balance is set to the net total of the generated transactions
    - Deletion, inserts and the balance update commit as one unit of work
    - Returns {"success": True, "message"} or {"success": False, "error"}
"""

import logging
import random
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.domain_types import (
    AccountId, TransactionStatus, TransactionType, UserId,
)
from fintrack.core.errors import FintrackError
from fintrack.infrastructure.database import unit_of_work
from fintrack.models.account import Account
from fintrack.models.transaction import Transaction

logger = logging.getLogger(__name__)

# (category, min, max) amount ranges per transaction type
CATEGORIES: dict[TransactionType, list[tuple[str, int, int]]] = {
    TransactionType.INCOME: [
        ("salary", 5000, 8000),
        ("freelance", 1000, 3000),
        ("investments", 500, 2000),
        ("other-income", 100, 1000),
    ],
    TransactionType.EXPENSE: [
        ("housing", 1000, 2000),
        ("transportation", 100, 500),
        ("groceries", 200, 600),
        ("utilities", 100, 300),
        ("entertainment", 50, 200),
        ("food", 50, 150),
        ("shopping", 100, 500),
        ("healthcare", 100, 1000),
        ("education", 200, 1000),
        ("travel", 500, 2000),
    ],
}

INCOME_PROBABILITY = 0.4


def generate_transactions(
    user_id: UserId,
    account_id: AccountId,
    days: int,
    rng: random.Random,
    now: datetime,
) -> tuple[list[dict], Decimal]:
    """Sample transaction rows and their net balance effect. Pure given rng."""
    rows: list[dict] = []
    total = Decimal("0")
    for day in range(days, -1, -1):
        date = now - timedelta(days=day)
        for _ in range(rng.randint(1, 3)):
            tx_type = (
                TransactionType.INCOME
                if rng.random() < INCOME_PROBABILITY
                else TransactionType.EXPENSE
            )
            category, low, high = rng.choice(CATEGORIES[tx_type])
            amount = Decimal(str(round(rng.uniform(low, high), 2))).quantize(Decimal("0.01"))
            total += amount if tx_type is TransactionType.INCOME else -amount
            rows.append({
                "id": uuid.uuid4(),
                "type": tx_type.value,
                "amount": amount,
                "description": (
                    f"{'Received' if tx_type is TransactionType.INCOME else 'Paid for'} "
                    f"{category}"
                ),
                "date": date,
                "category": category,
                "status": TransactionStatus.COMPLETED.value,
                "user_id": user_id,
                "account_id": account_id,
                "created_at": date,
                "updated_at": date,
            })
    return rows, total


async def seed_transactions(
    db: AsyncSession,
    user_id: UserId,
    account_id: AccountId,
    days: int = 90,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> dict:
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    rows, total = generate_transactions(user_id, account_id, days, rng, now)
    try:
        async with unit_of_work(db):
            await db.execute(
                delete(Transaction).where(Transaction.account_id == account_id),
            )
            db.add_all(Transaction(**row) for row in rows)
            await db.execute(
                update(Account)
                .where(Account.id == account_id)
                .values(balance=total),
            )
    except (FintrackError, SQLAlchemyError) as e:
        logger.error(
            f"Error seeding transactions: {e}",
            extra={"account_id": str(account_id)},
            exc_info=True,
        )
        return {"success": False, "error": str(e)}

    logger.info(
        f"Created {len(rows)} transactions",
        extra={"account_id": str(account_id), "count": len(rows)},
    )
    return {"success": True, "message": f"Created {len(rows)} transactions"}
