"""
Posting -- One debit or credit line against one account.

Responsibility:
    The immutable amount bound to an account, a side and a date. Postings
    are created while building a Transaction and shared read-only with the
    Ledger's posting index afterwards.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    positive_amounts -- amount is an exact Decimal > 0; direction is carried
                        by side, never by sign.

Failure modes:
    - InvalidAccountError if account is not an Account
    - InvalidSideError if side is not debit/credit
    - InvalidAmountError if amount <= 0 or not exactly decimal
    - InvalidDateError if date is not a date
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_type
from decimal import Decimal
from typing import Any

from ledger_kernel.domain.account import Account
from ledger_kernel.domain.values import Side, to_date, to_positive_amount, to_side
from ledger_kernel.exceptions import InvalidAccountError


@dataclass(frozen=True)
class Posting:
    """
    A single debit or credit posting.

    Contract:
        Equality is structural over every field (account compares by
        number).

    Guarantees:
        - Immutable and hashable.
        - side is a Side; amount is a Decimal > 0; date is a date.
        - is_debit and is_credit are mutually exclusive.
    """

    account: Account
    side: Side
    amount: Decimal
    date: date_type
    description: str | None = None
    reference: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.account, Account):
            raise InvalidAccountError(
                self.account,
                f"posting account must be an Account, got {type(self.account).__name__}",
            )
        object.__setattr__(self, "side", to_side(self.side))
        object.__setattr__(self, "amount", to_positive_amount(self.amount))
        object.__setattr__(self, "date", to_date(self.date))
        if self.description is not None:
            object.__setattr__(self, "description", str(self.description))
        if self.reference is not None:
            object.__setattr__(self, "reference", str(self.reference))

    @classmethod
    def debit(
        cls,
        account: Account,
        amount: Any,
        date: date_type,
        description: str | None = None,
        reference: str | None = None,
    ) -> Posting:
        """Create a debit posting."""
        return cls(account, Side.DEBIT, amount, date, description, reference)

    @classmethod
    def credit(
        cls,
        account: Account,
        amount: Any,
        date: date_type,
        description: str | None = None,
        reference: str | None = None,
    ) -> Posting:
        """Create a credit posting."""
        return cls(account, Side.CREDIT, amount, date, description, reference)

    @property
    def is_debit(self) -> bool:
        return self.side is Side.DEBIT

    @property
    def is_credit(self) -> bool:
        return self.side is Side.CREDIT

    @property
    def signed_amount(self) -> Decimal:
        """Debits positive, credits negative. Used only in balance math."""
        return self.amount if self.is_debit else self.amount.copy_negate()

    @property
    def absolute_amount(self) -> Decimal:
        return self.amount

    @property
    def increases_account(self) -> bool:
        """True iff the posting's side is the account's normal balance."""
        return self.side is self.account.normal_balance

    @property
    def decreases_account(self) -> bool:
        return not self.increases_account

    @property
    def balance_effect(self) -> Decimal:
        """
        Effect on the account's normal-side balance: +amount when the
        posting increases the account, -amount when it decreases it.
        """
        return self.amount if self.increases_account else self.amount.copy_negate()

    def __str__(self) -> str:
        return f"{self.side.abbreviation} {self.account.name} {self.amount}"
