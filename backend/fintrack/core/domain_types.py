"""Domain Types — identity wrappers and enums shared by models, schemas and services.

Invariants:
    - UserId, AccountId wrap UUIDs
    - ExternalUserId is the identity provider's opaque subject string
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders and store as plain strings
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
AccountId = NewType("AccountId", UUID)
ExternalUserId = NewType("ExternalUserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class AccountType(str, Enum):
    """Account category."""
    CURRENT = "CURRENT"
    SAVINGS = "SAVINGS"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class RecurringInterval(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class HealthStatus(str, Enum):
    """Overall health probe verdict — maps to the overall_status field."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    ERROR = "error"


# ─── Identity Provider Payload ───────────────────────────────────

@dataclass(frozen=True)
class ExternalIdentity:
    """Verified caller identity as supplied by the identity provider."""
    external_user_id: ExternalUserId
    first_name: str | None = None
    last_name: str | None = None
    email_addresses: tuple[str, ...] = field(default_factory=tuple)
    image_url: str | None = None
