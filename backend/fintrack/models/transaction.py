"""Transaction ORM — a dated financial event on an account.

Invariants:
    - amount is exact decimal (Numeric 18,2)
    - user_id denormalized from the account: dashboard queries span accounts
      without a join
    - recurring_interval is set only when is_recurring is True
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Index, Numeric, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from fintrack.core.domain_types import TransactionStatus
from fintrack.db.base import Base


class Transaction(Base):
    """Transaction entity — income or expense recorded against an account."""
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_user_id_date", "user_id", "date"),
        Index("ix_transactions_account_id", "account_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    receipt_url: Mapped[str | None] = mapped_column(
        String(2048), nullable=True,
    )
    is_recurring: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    recurring_interval: Mapped[str | None] = mapped_column(
        String(20), nullable=True,
    )
    next_recurring_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    last_processed: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TransactionStatus.COMPLETED.value,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship(
        "User", back_populates="transactions", lazy="raise",
    )
    account: Mapped["Account"] = relationship(
        "Account", back_populates="transactions", lazy="raise",
    )
