"""Dashboard Schemas — per-section envelopes for partial-failure rendering.

Invariants:
    - Exactly one of data / error is set on every section
"""

from pydantic import BaseModel

from fintrack.schemas.account import AccountResponse, TransactionResponse


class SectionError(BaseModel):
    code: str
    message: str


class AccountsSection(BaseModel):
    data: list[AccountResponse] | None = None
    error: SectionError | None = None


class TransactionsSection(BaseModel):
    data: list[TransactionResponse] | None = None
    error: SectionError | None = None


class DashboardResponse(BaseModel):
    accounts: AccountsSection
    transactions: TransactionsSection
