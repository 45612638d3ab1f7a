"""
Account -- Chart-of-accounts entries and their classification.

Responsibility:
    Defines the five account types, the normal balance and canonical
    numbering range of each, and the immutable Account value that every
    posting targets.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - normal_balance is a pure function of account_type:
      ASSET/EXPENSE -> DEBIT; LIABILITY/EQUITY/INCOME -> CREDIT.
    - Equality and hashing are defined solely by number. Two Account values
      with the same number are the same account.

Failure modes:
    - InvalidAccountTypeError for an unrecognized type.
    - InvalidAccountError for a non-integer account number.

Non-goals:
    - Number uniqueness across a chart is NOT checked here; that belongs to
      the chart that owns the accounts (see ledger_config.ChartOfAccounts).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from ledger_kernel.domain.values import Side
from ledger_kernel.exceptions import InvalidAccountError, InvalidAccountTypeError


class AccountType(str, Enum):
    """Types of accounts in the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True, slots=True)
class AccountTypeInfo:
    """Classification record for one account type."""

    name: AccountType
    normal_balance: Side
    number_range: range


ACCOUNT_TYPES: MappingProxyType[AccountType, AccountTypeInfo] = MappingProxyType({
    AccountType.ASSET: AccountTypeInfo(AccountType.ASSET, Side.DEBIT, range(1000, 2000)),
    AccountType.LIABILITY: AccountTypeInfo(AccountType.LIABILITY, Side.CREDIT, range(2000, 3000)),
    AccountType.EQUITY: AccountTypeInfo(AccountType.EQUITY, Side.CREDIT, range(3000, 4000)),
    AccountType.INCOME: AccountTypeInfo(AccountType.INCOME, Side.CREDIT, range(4000, 5000)),
    AccountType.EXPENSE: AccountTypeInfo(AccountType.EXPENSE, Side.DEBIT, range(5000, 6000)),
})


def to_account_type(value: Any) -> AccountType:
    """
    Normalize an account type.

    Accepts an AccountType or a case-insensitive type name.

    Raises:
        InvalidAccountTypeError: if the value names no known type.
    """
    if isinstance(value, AccountType):
        return value
    if isinstance(value, str):
        try:
            return AccountType(value.strip().lower())
        except ValueError:
            pass
    raise InvalidAccountTypeError(value, tuple(t.value for t in AccountType))


def type_info(account_type: AccountType | str) -> AccountTypeInfo:
    """Return the classification record for a type."""
    return ACCOUNT_TYPES[to_account_type(account_type)]


def account_types() -> tuple[AccountType, ...]:
    """All account types in canonical chart order."""
    return tuple(ACCOUNT_TYPES)


@dataclass(frozen=True, eq=False)
class Account:
    """
    Chart of Accounts entry -- the target of every posting.

    Contract:
        ``Account(name, account_type, number=None, description=None)``.
        When number is omitted it defaults to the first value of the type's
        canonical range (ASSET 1000, LIABILITY 2000, EQUITY 3000,
        INCOME 4000, EXPENSE 5000). This is a convenience, not a
        uniqueness guarantee.

    Guarantees:
        - Immutable (frozen dataclass).
        - account_type is always an AccountType.
        - number is always an int.
        - ``a == b`` iff ``a.number == b.number``; hash follows number.
    """

    name: str
    account_type: AccountType
    number: int | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))
        account_type = to_account_type(self.account_type)
        object.__setattr__(self, "account_type", account_type)

        if self.number is None:
            object.__setattr__(
                self, "number", ACCOUNT_TYPES[account_type].number_range.start
            )
        elif isinstance(self.number, bool) or not isinstance(self.number, int):
            raise InvalidAccountError(self.number, "account number must be an integer")

        if self.description is not None:
            object.__setattr__(self, "description", str(self.description))

    @property
    def type_info(self) -> AccountTypeInfo:
        return ACCOUNT_TYPES[self.account_type]

    @property
    def normal_balance(self) -> Side:
        """The side (debit or credit) that increases this account."""
        return self.type_info.normal_balance

    @property
    def debit_increases(self) -> bool:
        return self.normal_balance is Side.DEBIT

    @property
    def credit_increases(self) -> bool:
        return self.normal_balance is Side.CREDIT

    @property
    def in_canonical_range(self) -> bool:
        """Whether number falls inside the type's canonical numbering range."""
        return self.number in self.type_info.number_range

    @property
    def is_asset(self) -> bool:
        return self.account_type is AccountType.ASSET

    @property
    def is_liability(self) -> bool:
        return self.account_type is AccountType.LIABILITY

    @property
    def is_equity(self) -> bool:
        return self.account_type is AccountType.EQUITY

    @property
    def is_income(self) -> bool:
        return self.account_type is AccountType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.account_type is AccountType.EXPENSE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self.number == other.number

    def __hash__(self) -> int:
        return hash(self.number)

    def __str__(self) -> str:
        return f"{self.name} ({self.number})"

    def __repr__(self) -> str:
        return f"Account({self.number}, {self.name!r}, {self.account_type.value})"
