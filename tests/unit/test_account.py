"""Unit tests for Account classification and identity."""

from dataclasses import FrozenInstanceError

import pytest

from ledger_kernel.domain.account import (
    ACCOUNT_TYPES,
    Account,
    AccountType,
    account_types,
    type_info,
)
from ledger_kernel.domain.values import Side
from ledger_kernel.exceptions import InvalidAccountError, InvalidAccountTypeError


class TestNormalBalance:
    """Normal balance is a pure function of type."""

    @pytest.mark.parametrize(
        "account_type, expected",
        [
            (AccountType.ASSET, Side.DEBIT),
            (AccountType.EXPENSE, Side.DEBIT),
            (AccountType.LIABILITY, Side.CREDIT),
            (AccountType.EQUITY, Side.CREDIT),
            (AccountType.INCOME, Side.CREDIT),
        ],
    )
    def test_normal_balance(self, account_type, expected):
        account = Account("X", account_type)
        assert account.normal_balance is expected
        assert account.debit_increases is (expected is Side.DEBIT)
        assert account.credit_increases is (expected is Side.CREDIT)

    def test_debit_and_credit_increases_are_exclusive(self):
        for account_type in AccountType:
            account = Account("X", account_type)
            assert account.debit_increases != account.credit_increases


class TestDefaultNumbering:
    """Omitted numbers default to the start of the type's range."""

    @pytest.mark.parametrize(
        "account_type, expected",
        [
            (AccountType.ASSET, 1000),
            (AccountType.LIABILITY, 2000),
            (AccountType.EQUITY, 3000),
            (AccountType.INCOME, 4000),
            (AccountType.EXPENSE, 5000),
        ],
    )
    def test_default_number(self, account_type, expected):
        assert Account("X", account_type).number == expected

    def test_explicit_number_kept(self):
        assert Account("Petty Cash", AccountType.ASSET, 1010).number == 1010

    def test_canonical_range(self):
        assert Account("Cash", AccountType.ASSET, 1999).in_canonical_range
        assert not Account("Odd", AccountType.ASSET, 4100).in_canonical_range

    def test_non_integer_number_rejected(self):
        with pytest.raises(InvalidAccountError):
            Account("Cash", AccountType.ASSET, "1000")


class TestAccountType:
    """Type validation and lookup."""

    def test_string_type_normalized(self):
        assert Account("Cash", "Asset").account_type is AccountType.ASSET

    def test_invalid_type(self):
        with pytest.raises(InvalidAccountTypeError) as exc_info:
            Account("Cash", "revenue")
        assert exc_info.value.code == "INVALID_ACCOUNT_TYPE"
        assert exc_info.value.account_type == "revenue"
        assert "asset" in exc_info.value.valid_types

    def test_type_info(self):
        info = type_info("liability")
        assert info.normal_balance is Side.CREDIT
        assert info.number_range == range(2000, 3000)

    def test_type_info_unknown(self):
        with pytest.raises(InvalidAccountTypeError):
            type_info("contra")

    def test_account_types_canonical_order(self):
        assert account_types() == (
            AccountType.ASSET,
            AccountType.LIABILITY,
            AccountType.EQUITY,
            AccountType.INCOME,
            AccountType.EXPENSE,
        )
        assert set(ACCOUNT_TYPES) == set(AccountType)

    def test_predicates(self):
        account = Account("Rent", AccountType.EXPENSE, 5100)
        assert account.is_expense
        assert not (
            account.is_asset or account.is_liability or account.is_equity or account.is_income
        )
        assert account.type_info is ACCOUNT_TYPES[AccountType.EXPENSE]


class TestIdentity:
    """Equality and hashing by number only."""

    def test_same_number_equal_despite_other_fields(self):
        a = Account("Cash", AccountType.ASSET, 1000)
        b = Account("Bank", AccountType.ASSET, 1000, "renamed")
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_number_not_equal(self):
        assert Account("Cash", AccountType.ASSET, 1000) != Account("Cash", AccountType.ASSET, 1001)

    def test_not_equal_to_other_types(self):
        assert Account("Cash", AccountType.ASSET, 1000) != 1000

    def test_immutable(self):
        account = Account("Cash", AccountType.ASSET, 1000)
        with pytest.raises(FrozenInstanceError):
            account.number = 1001

    def test_str_and_repr(self):
        account = Account("Cash", AccountType.ASSET, 1000)
        assert str(account) == "Cash (1000)"
        assert repr(account) == "Account(1000, 'Cash', asset)"
