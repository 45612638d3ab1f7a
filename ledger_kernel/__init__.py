"""
Ledger Kernel

An in-memory, invariant-preserving double-entry accounting core with:
- Immutable accounts and postings
- Transactions that cannot exist unless balanced
- An append-only ledger with derived (never stored) balances
- A trial balance that re-checks the accounting identity
"""

__version__ = "0.1.0"
