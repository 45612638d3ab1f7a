"""Read-only report selectors derived from a Ledger."""

from ledger_kernel.selectors.trial_balance import TrialBalance, TrialBalanceRow

__all__ = ["TrialBalance", "TrialBalanceRow"]
