"""Default Account Rules — pure decisions behind the one-default-per-user invariant.

Invariants:
    - A user's first account is always default, whatever the caller asked for
    - Once a user has >= 1 account, exactly one has is_default = True
    - parse_balance accepts str | int | float | Decimal, rejects NaN/Infinity
      and anything wider than the Numeric(18, 2) balance column

Design Decisions:
    - Decisions are pure here; the clear-then-insert transition runs in
      services/accounts.py inside one unit of work
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable

from fintrack.core.errors import InvalidInput

BALANCE_QUANTUM = Decimal("0.01")
# Numeric(18, 2) leaves 16 integer digits
MAX_BALANCE_EXPONENT = 15


def resolve_effective_default(existing_count: int, requested_default: bool) -> bool:
    """First account is forced default; otherwise honor the request."""
    if existing_count == 0:
        return True
    return bool(requested_default)


def parse_balance(raw: object) -> Decimal:
    """Parse a client balance into an exact two-place Decimal."""
    if isinstance(raw, bool) or raw is None:
        raise InvalidInput("Invalid balance value", "balance")
    try:
        value = Decimal(str(raw).strip())
        if not value.is_finite():
            raise InvalidInput("Invalid balance value", "balance")
        value = value.quantize(BALANCE_QUANTUM, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise InvalidInput("Invalid balance value", "balance")
    if value.adjusted() > MAX_BALANCE_EXPONENT:
        raise InvalidInput("Invalid balance value", "balance")
    return value


def count_defaults(flags: Iterable[bool]) -> int:
    return sum(1 for f in flags if f)


def default_invariant_holds(flags: Iterable[bool]) -> bool:
    """True when no accounts exist or exactly one is default."""
    flags = list(flags)
    if not flags:
        return True
    return count_defaults(flags) == 1
