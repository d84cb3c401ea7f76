"""Account ORM — a named financial container owned by one user.

Invariants:
    - balance is exact decimal (Numeric 18,2), never float in storage
    - type is an AccountType value
    - At most one is_default row per user_id (partial unique index)
    - Exactly one default per user once any account exists (enforced by
      services/accounts.py inside a single unit of work)
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Index, Numeric, String, text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from fintrack.core.domain_types import AccountType
from fintrack.db.base import Base


class Account(Base):
    """Account entity — holds a balance and groups transactions."""
    __tablename__ = "accounts"
    __table_args__ = (
        Index("ix_accounts_user_id_created_at", "user_id", "created_at"),
        Index(
            "uq_accounts_one_default_per_user", "user_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccountType.CURRENT.value,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=Decimal("0"),
    )
    is_default: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
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
        "User", back_populates="accounts", lazy="raise",
    )
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="account",
        cascade="all, delete-orphan", lazy="raise",
    )
