"""Decimal Serialization — converts exact-decimal storage values to JSON numbers.

Invariants:
    - serialize_record returns a shallow copy; the input mapping is never mutated
    - balance/amount are converted to float whenever present and not None
      (Decimal("0") becomes 0.0; it never leaks as a Decimal)
    - Keys other than the decimal fields are copied unchanged

Design Decisions:
    - Presence check over truthiness check: a zero balance is a legitimate value
"""

from typing import Any, Mapping

DECIMAL_FIELDS: tuple[str, ...] = ("balance", "amount")


def serialize_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow copy of record with decimal money fields as floats. Pure."""
    serialized = dict(record)
    for key in DECIMAL_FIELDS:
        value = record.get(key)
        if value is not None:
            serialized[key] = float(value)
    return serialized
