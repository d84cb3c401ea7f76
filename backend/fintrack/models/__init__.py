"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; accounts and transactions scoped by user_id

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from fintrack.models.user import User  # noqa: F401
from fintrack.models.account import Account  # noqa: F401
from fintrack.models.transaction import Transaction  # noqa: F401
