"""
Pure domain layer.

This module contains the immutable accounting values with NO dependencies on:
- Persistence
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from ledger_kernel.domain.account import (
    ACCOUNT_TYPES,
    Account,
    AccountType,
    AccountTypeInfo,
    account_types,
    to_account_type,
    type_info,
)
from ledger_kernel.domain.posting import Posting
from ledger_kernel.domain.transaction import PostingSpec, Transaction
from ledger_kernel.domain.values import (
    ZERO,
    Side,
    to_date,
    to_decimal,
    to_positive_amount,
    to_side,
)

__all__ = [
    # Values
    "ZERO",
    "Side",
    "to_date",
    "to_decimal",
    "to_positive_amount",
    "to_side",
    # Accounts
    "ACCOUNT_TYPES",
    "Account",
    "AccountType",
    "AccountTypeInfo",
    "account_types",
    "to_account_type",
    "type_info",
    # Postings and transactions
    "Posting",
    "PostingSpec",
    "Transaction",
]
