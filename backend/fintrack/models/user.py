"""User ORM — application principal mapped from an external identity.

Invariants:
    - external_user_id is unique: the backstop for concurrent lazy provisioning
    - email is non-nullable and unique
    - Never deleted by the API; accounts/transactions cascade if deleted manually
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from fintrack.db.base import Base


class User(Base):
    """User entity — owns accounts and transactions."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    external_user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    image_url: Mapped[str] = mapped_column(
        String(2048), nullable=False, default="",
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

    # lazy="raise": async sessions must load relations explicitly
    accounts: Mapped[list["Account"]] = relationship(
        "Account", back_populates="user",
        cascade="all, delete-orphan", lazy="raise",
    )
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="user",
        cascade="all, delete-orphan", lazy="raise",
    )
