"""
Ledger -- Append-only store of posted transactions.

The Ledger is responsible for:
- Recording Transactions in posting order
- Keeping a flattened posting index (the concatenation of every posted
  transaction's postings)
- Deriving account balances from that history on every call

The Ledger does NOT:
- Validate balance (a Transaction cannot exist unbalanced)
- Store balances (every figure is recomputed)
- Remove individual transactions (clear() is the only deletion)

Concurrency:
    One re-entrant lock guards every mutation and every multi-step read, so
    a read never observes the ledger mid-append. post_all() is NOT atomic:
    transactions before a failing element stay posted.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ledger_kernel.domain.account import Account, AccountType, to_account_type
from ledger_kernel.domain.posting import Posting
from ledger_kernel.domain.transaction import Transaction
from ledger_kernel.domain.values import Side, subtract_amounts, sum_amounts
from ledger_kernel.exceptions import InvalidTransactionError
from ledger_kernel.invariants import KernelInvariant
from ledger_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.ledger")


class Ledger:
    """
    General ledger over an in-memory, append-only posting history.

    Contract:
        postings is always exactly the concatenation, in order, of the
        postings of every transaction posted since creation or the last
        clear().

    Guarantees:
        - total_debits == total_credits for any ledger built only through
          post()/post_all().
        - balance(account) reads as "amount on the normal-balance side, net
          of contra-side postings" and is Decimal("0") for an unknown
          account.
    """

    def __init__(self, name: str = "general"):
        self.name = name
        self._transactions: list[Transaction] = []
        self._postings: list[Posting] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def post(self, transaction: Transaction) -> Ledger:
        """
        Append a transaction and its postings.

        Either fully succeeds or mutates nothing.

        Returns:
            self, for chaining.

        Raises:
            InvalidTransactionError: if ``transaction`` is not a Transaction.
        """
        if not isinstance(transaction, Transaction):
            with LogContext.bind(ledger_id=self.name):
                logger.warning(
                    "transaction_rejected",
                    extra={"received_type": type(transaction).__name__},
                )
            raise InvalidTransactionError(transaction)

        with self._lock:
            self._transactions.append(transaction)
            self._postings.extend(transaction.postings)
            transaction_count = len(self._transactions)

        with LogContext.bind(ledger_id=self.name, transaction_reference=transaction.reference):
            logger.info(
                "transaction_posted",
                extra={
                    "description": transaction.description,
                    "effective_date": transaction.date,
                    "posting_count": len(transaction.postings),
                    "amount": str(transaction.total_debits),
                    "transaction_count": transaction_count,
                },
            )
        return self

    def post_all(self, transactions: Iterable[Transaction]) -> Ledger:
        """
        Post transactions one by one, in order.

        Stops at and re-raises the first failure. Transactions posted before
        the failure are NOT rolled back; validate everything first if
        atomicity is required.
        """
        for transaction in transactions:
            self.post(transaction)
        return self

    def clear(self) -> None:
        """Wipe the transaction history and posting index. Irreversible."""
        with self._lock:
            removed = len(self._transactions)
            self._transactions.clear()
            self._postings.clear()
        with LogContext.bind(ledger_id=self.name):
            logger.info("ledger_cleared", extra={"transactions_removed": removed})

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        with self._lock:
            return tuple(self._transactions)

    @property
    def postings(self) -> tuple[Posting, ...]:
        with self._lock:
            return tuple(self._postings)

    @property
    def transaction_count(self) -> int:
        with self._lock:
            return len(self._transactions)

    @property
    def posting_count(self) -> int:
        with self._lock:
            return len(self._postings)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._postings

    def __len__(self) -> int:
        return self.posting_count

    def entries_for(self, account: Account) -> list[Posting]:
        """All postings against account, in posting order."""
        return [p for p in self.postings if p.account == account]

    def entries_between(self, start_date: date, end_date: date) -> list[Posting]:
        """Postings dated within [start_date, end_date]."""
        return [p for p in self.postings if start_date <= p.date <= end_date]

    def transactions_between(self, start_date: date, end_date: date) -> list[Transaction]:
        """Transactions dated within [start_date, end_date]."""
        return [t for t in self.transactions if start_date <= t.date <= end_date]

    def accounts(self) -> list[Account]:
        """Distinct accounts in order of first appearance."""
        return list(dict.fromkeys(p.account for p in self.postings))

    def accounts_by_type(self, account_type: AccountType | str) -> list[Account]:
        wanted = to_account_type(account_type)
        return [a for a in self.accounts() if a.account_type is wanted]

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def balance(self, account: Account) -> Decimal:
        """
        Net balance of account on its normal-balance side.

        INVARIANT: derived_balances -- recomputed from the posting history.
        A negative result means the account sits opposite its normal side.
        """
        postings = self.entries_for(account)
        debits = sum_amounts(p.amount for p in postings if p.is_debit)
        credits = sum_amounts(p.amount for p in postings if p.is_credit)
        if account.normal_balance is Side.DEBIT:
            return subtract_amounts(debits, credits)
        return subtract_amounts(credits, debits)

    def all_balances(self) -> dict[Account, Decimal]:
        """Balance of every account in the history, in first-appearance order."""
        with self._lock:
            return {account: self.balance(account) for account in self.accounts()}

    @property
    def total_debits(self) -> Decimal:
        return sum_amounts(p.amount for p in self.postings if p.is_debit)

    @property
    def total_credits(self) -> Decimal:
        return sum_amounts(p.amount for p in self.postings if p.is_credit)

    @property
    def is_balanced(self) -> bool:
        """
        Global double-entry check.

        INVARIANT: double_entry_balance -- holds by construction.
        """
        with self._lock:
            debits, credits = self.total_debits, self.total_credits
        if debits != credits:
            with LogContext.bind(ledger_id=self.name):
                logger.error(
                    "ledger_out_of_balance",
                    extra={
                        "total_debits": str(debits),
                        "total_credits": str(credits),
                        "invariant": KernelInvariant.DOUBLE_ENTRY_BALANCE.value,
                    },
                )
        return debits == credits

    def __repr__(self) -> str:
        return (
            f"Ledger({self.name!r}, postings={self.posting_count}, "
            f"transactions={self.transaction_count})"
        )
