"""Account Schemas — request validation and response coercion."""

import pytest
from pydantic import ValidationError

from fintrack.core.domain_types import AccountType
from fintrack.schemas.account import AccountCreate, AccountResponse


class TestAccountCreate:
    def test_defaults(self):
        body = AccountCreate(name="Main", balance="10.00")
        assert body.type == AccountType.CURRENT
        assert body.is_default is False

    def test_name_stripped(self):
        assert AccountCreate(name="  Main  ", balance=1).name == "Main"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    def test_bad_names_rejected(self, name):
        with pytest.raises(ValidationError):
            AccountCreate(name=name, balance="1")

    def test_balance_kept_raw(self):
        # Parsing happens in the account service
        assert AccountCreate(name="Main", balance="abc").balance == "abc"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            AccountCreate(name="Main", balance="1", type="CHECKING")


def test_response_balance_is_float():
    resp = AccountResponse(
        id="2f1c8f6e-4b8a-4c57-9a8e-1d2f3a4b5c6d",
        user_id="7a9b1c2d-3e4f-4a5b-8c6d-7e8f9a0b1c2d",
        name="Main",
        type="SAVINGS",
        balance=12.5,
        is_default=True,
        created_at="2026-01-01T00:00:00Z",
        updated_at="2026-01-01T00:00:00Z",
    )
    assert resp.balance == 12.5
    assert resp.transaction_count is None
