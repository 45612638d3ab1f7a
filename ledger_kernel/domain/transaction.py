"""
Transaction -- A balanced group of postings recorded as one journal entry.

Responsibility:
    Resolves posting specifications into Postings and refuses to exist
    unless total debits equal total credits. This construction-time check is
    the kernel's central invariant: because no unbalanced Transaction can be
    built, every Ledger assembled from Transactions is balanced too.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (logging only).

Invariants enforced:
    double_entry_balance -- total_debits == total_credits, checked in
                            __post_init__ for every construction path.

Failure modes:
    - UnbalancedTransactionError (carries the imbalance) when debits !=
      credits
    - MissingPostingDataError when a spec has no account, no resolvable
      side/amount, or the posting list is empty
    - Any Posting construction error (InvalidAmountError, InvalidSideError,
      ...) propagates unchanged

Resolution rules for a posting spec:
    1. side given     -> that side; amount from ``amount`` or the matching
                         ``debit``/``credit`` field
    2. debit only     -> debit side; amount from ``amount`` or ``debit``
    3. credit only    -> credit side; amount from ``amount`` or ``credit``
    4. amount given   -> the account's normal-balance side (also when both
                         ``debit`` and ``credit`` are given)
    5. anything else  -> MissingPostingDataError
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date as date_type
from decimal import Decimal
from typing import Any

from ledger_kernel.domain.account import Account
from ledger_kernel.domain.posting import Posting
from ledger_kernel.domain.values import (
    ZERO,
    Side,
    subtract_amounts,
    sum_amounts,
    to_date,
    to_side,
)
from ledger_kernel.exceptions import (
    MissingPostingDataError,
    UnbalancedTransactionError,
)
from ledger_kernel.invariants import KernelInvariant
from ledger_kernel.logging_config import LogContext, get_logger

logger = get_logger("domain.transaction")

_SPEC_FIELDS = ("account", "debit", "credit", "amount", "side", "description")


@dataclass(frozen=True)
class PostingSpec:
    """
    Caller-side description of one posting inside a transaction.

    Either an explicit side (``side`` + ``amount``, or ``debit=`` /
    ``credit=``) or a bare ``amount`` whose side is inferred from the
    account's normal balance.
    """

    account: Account
    debit: Any = None
    credit: Any = None
    amount: Any = None
    side: Side | str | None = None
    description: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PostingSpec:
        """Build a spec from a dict using the same field names."""
        return cls(**{name: data.get(name) for name in _SPEC_FIELDS})

    def resolve(self) -> tuple[Side, Any]:
        """
        Return the (side, raw amount) this spec denotes.

        Raises:
            MissingPostingDataError: if no side/amount combination resolves.
        """
        if not isinstance(self.account, Account):
            raise MissingPostingDataError(self, "spec must name an Account")

        if self.side is not None:
            side = to_side(self.side)
            contra = self.credit if side is Side.DEBIT else self.debit
            if contra is not None:
                raise MissingPostingDataError(
                    self, f"side is {side.value} but a {side.opposite.value} value was given"
                )
            own = self.debit if side is Side.DEBIT else self.credit
            amount = self.amount if self.amount is not None else own
            if amount is None:
                raise MissingPostingDataError(self, "side given without an amount")
            return side, amount

        has_debit = self.debit is not None
        has_credit = self.credit is not None
        if has_debit and not has_credit:
            return Side.DEBIT, self.amount if self.amount is not None else self.debit
        if has_credit and not has_debit:
            return Side.CREDIT, self.amount if self.amount is not None else self.credit
        # both debit and credit given: the amount goes on the normal side
        if self.amount is not None:
            return self.account.normal_balance, self.amount

        if has_debit:
            raise MissingPostingDataError(self, "both debit and credit given without an amount")
        raise MissingPostingDataError(self, "spec must specify debit, credit or amount")


def _as_spec(item: PostingSpec | Mapping[str, Any]) -> PostingSpec:
    if isinstance(item, PostingSpec):
        return item
    if isinstance(item, Mapping):
        return PostingSpec.from_mapping(item)
    raise MissingPostingDataError(
        item, f"expected a PostingSpec or mapping, got {type(item).__name__}"
    )


@dataclass(frozen=True)
class Transaction:
    """
    Journal entry: a balanced, ordered tuple of postings.

    Contract:
        ``Transaction.create(description, date, specs, reference=None)``
        builds postings from specs. Direct construction with ready Postings
        is validated the same way.

    Guarantees:
        - Immutable; postings is a tuple in the given order.
        - total_debits == total_credits, so imbalance is always zero.
        - At least one posting.
    """

    description: str
    date: date_type
    postings: tuple[Posting, ...]
    reference: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "description", str(self.description))
        object.__setattr__(self, "date", to_date(self.date))
        if self.reference is not None:
            object.__setattr__(self, "reference", str(self.reference))

        postings = tuple(self.postings)
        if not postings:
            raise MissingPostingDataError(postings, "transaction has no postings")
        for posting in postings:
            if not isinstance(posting, Posting):
                raise MissingPostingDataError(
                    posting, f"expected a Posting, got {type(posting).__name__}"
                )
        object.__setattr__(self, "postings", postings)

        # INVARIANT: double_entry_balance
        debits = self.total_debits
        credits = self.total_credits
        if debits != credits:
            imbalance = subtract_amounts(debits, credits)
            with LogContext.bind(transaction_reference=self.reference):
                logger.warning(
                    "transaction_unbalanced",
                    extra={
                        "description": self.description,
                        "total_debits": str(debits),
                        "total_credits": str(credits),
                        "imbalance": str(imbalance),
                        "invariant": KernelInvariant.DOUBLE_ENTRY_BALANCE.value,
                    },
                )
            raise UnbalancedTransactionError(debits, credits, imbalance)

    @classmethod
    def create(
        cls,
        description: str,
        date: date_type,
        specs: Iterable[PostingSpec | Mapping[str, Any]],
        reference: str | None = None,
    ) -> Transaction:
        """
        Build a transaction from posting specs.

        Every posting inherits the transaction's date and reference.

        Raises:
            UnbalancedTransactionError: if debits != credits.
            MissingPostingDataError: if a spec cannot be resolved.
        """
        day = to_date(date)
        postings = []
        for item in specs:
            spec = _as_spec(item)
            side, amount = spec.resolve()
            postings.append(
                Posting(spec.account, side, amount, day, spec.description, reference)
            )
        return cls(description, day, tuple(postings), reference)

    @property
    def debit_postings(self) -> tuple[Posting, ...]:
        return tuple(p for p in self.postings if p.is_debit)

    @property
    def credit_postings(self) -> tuple[Posting, ...]:
        return tuple(p for p in self.postings if p.is_credit)

    @property
    def total_debits(self) -> Decimal:
        return sum_amounts(p.amount for p in self.debit_postings)

    @property
    def total_credits(self) -> Decimal:
        return sum_amounts(p.amount for p in self.credit_postings)

    @property
    def imbalance(self) -> Decimal:
        """total_debits - total_credits; zero for every constructed instance."""
        return subtract_amounts(self.total_debits, self.total_credits)

    @property
    def is_balanced(self) -> bool:
        return self.imbalance == ZERO

    @property
    def is_simple(self) -> bool:
        """Exactly two postings."""
        return len(self.postings) == 2

    @property
    def is_compound(self) -> bool:
        """More than two postings."""
        return len(self.postings) > 2

    @property
    def accounts(self) -> tuple[Account, ...]:
        """Distinct accounts in posting order."""
        return tuple(dict.fromkeys(p.account for p in self.postings))

    def postings_for(self, account: Account) -> tuple[Posting, ...]:
        return tuple(p for p in self.postings if p.account == account)

    def posting_for(self, account: Account) -> Posting | None:
        """First posting against account, or None."""
        return next((p for p in self.postings if p.account == account), None)

    def __str__(self) -> str:
        return (
            f"{self.description} ({self.date.isoformat()}) - "
            f"DR: {self.total_debits}, CR: {self.total_credits}"
        )
