"""
Module: ledger_kernel.selectors.trial_balance
Responsibility: Point-in-time trial balance computed from a Ledger. The
    trial balance is a derived view; it is never stored and never patched.
    If the ledger is posted to afterwards, compute a new one.
Architecture position: Kernel > Selectors. May import from domain/ and
    services/. MUST NOT mutate the ledger.

Invariants enforced:
    trial_balance_reconciliation -- total of debit_balance equals total of
        credit_balance. Each row nets the account's postings, so the column
        totals equal the ledger's gross totals only when no account carries
        postings on both sides; the difference (debits - credits) is zero in
        both views.

Presentation:
    Every figure is non-negative. An account whose balance is negative
    (e.g. an overdrawn asset) is shown, as an absolute value, in the column
    opposite its normal balance.

Failure modes:
    - InvalidLedgerError when given anything other than a Ledger.
    - InvalidDateError when the report date is not a date.
    - InvalidTrialBalanceRowError for a row with both, neither or a
      negative column.
"""


from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_type
from decimal import Decimal

from ledger_kernel.domain.account import Account, AccountType, to_account_type
from ledger_kernel.domain.values import ZERO, Side, subtract_amounts, sum_amounts, to_date
from ledger_kernel.exceptions import InvalidLedgerError, InvalidTrialBalanceRowError
from ledger_kernel.invariants import KernelInvariant
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.services.ledger import Ledger

logger = get_logger("selectors.trial_balance")


@dataclass(frozen=True)
class TrialBalanceRow:
    """
    A single row in a trial balance report.

    Exactly one of debit_balance / credit_balance is set, and it is a
    non-negative Decimal.
    """

    account: Account
    debit_balance: Decimal | None = None
    credit_balance: Decimal | None = None

    def __post_init__(self) -> None:
        columns = [c for c in (self.debit_balance, self.credit_balance) if c is not None]
        if len(columns) != 1:
            raise InvalidTrialBalanceRowError(
                self.account, "exactly one of debit_balance, credit_balance must be set"
            )
        value = columns[0]
        if not isinstance(value, Decimal) or not value.is_finite() or value < ZERO:
            raise InvalidTrialBalanceRowError(
                self.account, f"balance must be a non-negative Decimal, got {value!r}"
            )

    @property
    def side(self) -> Side:
        return Side.DEBIT if self.debit_balance is not None else Side.CREDIT

    @property
    def balance(self) -> Decimal:
        """Net balance (debit column - credit column)."""
        return subtract_amounts(self.debit_balance or ZERO, self.credit_balance or ZERO)


def _row_for(account: Account, balance: Decimal) -> TrialBalanceRow:
    side = account.normal_balance if balance >= ZERO else account.normal_balance.opposite
    if side is Side.DEBIT:
        return TrialBalanceRow(account, debit_balance=balance.copy_abs())
    return TrialBalanceRow(account, credit_balance=balance.copy_abs())


@dataclass(frozen=True)
class TrialBalance:
    """
    Trial balance over one ledger snapshot.

    Contract:
        ``TrialBalance(ledger, date=None)`` computes the report; ``create``
        and ``from_ledger`` are aliases. One row per distinct account in the
        ledger's history, sorted by account number ascending. The date
        defaults to today.

    Guarantees:
        - Immutable once computed; rows cannot be supplied by the caller.
        - Rows come from a single atomic ``ledger.all_balances()`` read.

    Raises:
        InvalidLedgerError: if ledger is not a Ledger.
        InvalidDateError: if date is given and is not a date.
    """

    ledger: Ledger
    date: date_type | None = None
    rows: tuple[TrialBalanceRow, ...] = field(init=False)

    def __post_init__(self) -> None:
        ledger = self.ledger
        if not isinstance(ledger, Ledger):
            logger.warning(
                "trial_balance_rejected",
                extra={"received_type": type(ledger).__name__},
            )
            raise InvalidLedgerError(ledger)
        report_date = date_type.today() if self.date is None else to_date(self.date)
        object.__setattr__(self, "date", report_date)

        balances = ledger.all_balances()
        rows = tuple(
            _row_for(account, balances[account])
            for account in sorted(balances, key=lambda a: a.number)
        )
        object.__setattr__(self, "rows", rows)

        debits, credits = self.total_debits, self.total_credits
        with LogContext.bind(ledger_id=ledger.name):
            logger.info(
                "trial_balance_computed",
                extra={
                    "as_of_date": report_date,
                    "row_count": len(rows),
                    "total_debits": str(debits),
                    "total_credits": str(credits),
                    "balanced": debits == credits,
                },
            )
            if debits != credits:
                logger.error(
                    "trial_balance_out_of_balance",
                    extra={
                        "imbalance": str(self.imbalance),
                        "invariant": KernelInvariant.TRIAL_BALANCE_RECONCILIATION.value,
                    },
                )

    @classmethod
    def create(cls, ledger: Ledger, date: date_type | None = None) -> TrialBalance:
        """Compute a trial balance from ledger."""
        return cls(ledger, date)

    from_ledger = create

    @property
    def total_debits(self) -> Decimal:
        return sum_amounts(r.debit_balance for r in self.rows if r.debit_balance is not None)

    @property
    def total_credits(self) -> Decimal:
        return sum_amounts(r.credit_balance for r in self.rows if r.credit_balance is not None)

    @property
    def imbalance(self) -> Decimal:
        return subtract_amounts(self.total_debits, self.total_credits)

    @property
    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(r.account for r in self.rows)

    def rows_for_type(self, account_type: AccountType | str) -> list[TrialBalanceRow]:
        wanted = to_account_type(account_type)
        return [r for r in self.rows if r.account.account_type is wanted]

    def row_for(self, account: Account) -> TrialBalanceRow | None:
        return next((r for r in self.rows if r.account == account), None)

    def __len__(self) -> int:
        return len(self.rows)
