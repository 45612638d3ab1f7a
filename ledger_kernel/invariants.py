"""
Kernel Invariants Contract.

These invariants are structural law. They are enforced at construction time
by the domain values and by the Ledger's append-only discipline. Nothing in
configuration may switch them off.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across domain.posting, domain.transaction,
services.ledger and selectors.trial_balance.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel.

    Each value names one structural guarantee that the kernel provides
    unconditionally.
    """

    DOUBLE_ENTRY_BALANCE = "double_entry_balance"
    """Debits must equal credits in every transaction. Enforced by
    Transaction.__post_init__; an unbalanced transaction never exists."""

    POSITIVE_AMOUNTS = "positive_amounts"
    """Every posting amount is a strictly positive exact decimal. The side
    carries the direction. Enforced by Posting.__post_init__."""

    APPEND_ONLY = "append_only"
    """The ledger's posting index is always the concatenation of the
    postings of every posted transaction. The only deletion is a full
    clear(). Enforced by Ledger."""

    DERIVED_BALANCES = "derived_balances"
    """No stored balances. Every balance is recomputed from the posting
    history on each call. Enforced by Ledger.balance()."""

    TRIAL_BALANCE_RECONCILIATION = "trial_balance_reconciliation"
    """Trial balance debit and credit columns total the same amount, and
    each row is the net of the ledger's postings for that account. Checked
    by TrialBalance.create."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = ("ledger_config",)
