"""Account Schemas — account creation input and account/transaction output.

Invariants:
    - AccountCreate.name: 1-100 chars, stripped, non-empty
    - AccountCreate.balance is kept raw (str | number); numeric parsing belongs
      to the account service so that failures carry the operation prefix
    - Response money fields are floats (see core/serialization.py)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from fintrack.core.domain_types import (
    AccountType, RecurringInterval, TransactionStatus, TransactionType,
)


class AccountCreate(BaseModel):
    """Account creation — the default flag may be overridden for a first account."""
    name: str = Field(min_length=1, max_length=100)
    type: AccountType = AccountType.CURRENT
    balance: str | int | float
    is_default: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class AccountResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    type: AccountType
    balance: float
    is_default: bool
    created_at: datetime
    updated_at: datetime
    transaction_count: int | None = None


class TransactionResponse(BaseModel):
    id: UUID
    type: TransactionType
    amount: float
    description: str | None = None
    date: datetime
    category: str
    receipt_url: str | None = None
    is_recurring: bool = False
    recurring_interval: RecurringInterval | None = None
    next_recurring_date: datetime | None = None
    last_processed: datetime | None = None
    status: TransactionStatus
    user_id: UUID
    account_id: UUID
    created_at: datetime
    updated_at: datetime
