"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Every invariant violation in the kernel is a programmer-input error raised at
the point of construction. Callers catch by type, read the machine-readable
``code``, and inspect structured attributes instead of parsing messages.

Example - WRONG way to handle errors:
    try:
        Transaction.create("Sale", day, specs)
    except Exception as e:
        if "not balanced" in str(e):  # FRAGILE - message might change
            ...

Example - RIGHT way:
    try:
        Transaction.create("Sale", day, specs)
    except UnbalancedTransactionError as e:
        log.warning("rejected", extra={"imbalance": e.imbalance})
        api_response(code=e.code, imbalance=str(e.imbalance))

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from LedgerKernelError:

    LedgerKernelError (base)
    |
    +-- AccountError
    |   +-- InvalidAccountTypeError
    |   +-- InvalidAccountError
    |
    +-- PostingError
    |   +-- InvalidAmountError
    |   +-- InvalidSideError
    |   +-- InvalidDateError
    |   +-- MissingPostingDataError
    |   +-- UnbalancedTransactionError
    |
    +-- LedgerError
    |   +-- InvalidTransactionError
    |   +-- InvalidLedgerError
    |   +-- InvalidTrialBalanceRowError
    |
    +-- ConfigurationError
        +-- DuplicateAccountNumberError
        +-- AccountNotFoundError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Account         | INVALID_ACCOUNT_TYPE        | Type is not one of the five categories
                | INVALID_ACCOUNT             | Value is not an Account
----------------|-----------------------------|-----------------------------------------
Posting         | INVALID_AMOUNT              | Amount <= 0, float, NaN, non-numeric
                | INVALID_SIDE                | Side is not debit/credit
                | INVALID_DATE                | Date is not a datetime.date
                | MISSING_POSTING_DATA        | Spec has no resolvable side/amount
                | UNBALANCED_TRANSACTION      | Debits != Credits
----------------|-----------------------------|-----------------------------------------
Ledger          | INVALID_TRANSACTION         | post() given a non-Transaction
                | INVALID_LEDGER              | TrialBalance given a non-Ledger
                | INVALID_TRIAL_BALANCE_ROW   | Row with both, neither or a negative column
----------------|-----------------------------|-----------------------------------------
Configuration   | DUPLICATE_ACCOUNT_NUMBER    | Two chart entries share a number
                | ACCOUNT_NOT_FOUND           | Chart lookup miss

===============================================================================
DESIGN DECISIONS
===============================================================================

1. Exceptions inherit from Exception, not ValueError/TypeError, so that
   domain errors are catchable as a group and never mixed with programming
   errors raised by the interpreter.

2. ``code`` is a class attribute: static per type, available without
   instantiation.

3. All context is stored as attributes so it survives logging and
   serialization (see logging_config.StructuredFormatter).
"""

from decimal import Decimal
from typing import Any


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Account-related exceptions


class AccountError(LedgerKernelError):
    """Base exception for account-related errors."""

    code: str = "ACCOUNT_ERROR"


class InvalidAccountTypeError(AccountError):
    """Account type is not one of the five recognized categories."""

    code: str = "INVALID_ACCOUNT_TYPE"

    def __init__(self, account_type: Any, valid_types: tuple[str, ...] = ()):
        self.account_type = account_type
        self.valid_types = valid_types
        message = f"Invalid account type: {account_type!r}"
        if valid_types:
            message += f". Must be one of: {', '.join(valid_types)}"
        super().__init__(message)


class InvalidAccountError(AccountError):
    """A value that must be an Account is something else."""

    code: str = "INVALID_ACCOUNT"

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid account {value!r}: {reason}")


# Posting-related exceptions


class PostingError(LedgerKernelError):
    """Base exception for posting and transaction construction errors."""

    code: str = "POSTING_ERROR"


class InvalidAmountError(PostingError):
    """
    Amount is not a strictly positive exact decimal.

    Reductions are expressed by posting to the opposite side, never by a
    negative amount.
    """

    code: str = "INVALID_AMOUNT"

    def __init__(self, amount: Any, reason: str):
        self.amount = amount
        self.reason = reason
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class InvalidSideError(PostingError):
    """Side is neither debit nor credit."""

    code: str = "INVALID_SIDE"

    def __init__(self, side: Any):
        self.side = side
        super().__init__(f"Side must be 'debit' or 'credit', got {side!r}")


class InvalidDateError(PostingError):
    """Posting or transaction date is not a date."""

    code: str = "INVALID_DATE"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Date must be a datetime.date instance, got {type(value).__name__}"
        )


class MissingPostingDataError(PostingError):
    """A posting specification has no resolvable account, side or amount."""

    code: str = "MISSING_POSTING_DATA"

    def __init__(self, spec: Any, reason: str):
        self.spec = spec
        self.reason = reason
        super().__init__(f"Cannot build posting from {spec!r}: {reason}")


class UnbalancedTransactionError(PostingError):
    """Transaction debits do not equal credits."""

    code: str = "UNBALANCED_TRANSACTION"

    def __init__(self, total_debits: Decimal, total_credits: Decimal, imbalance: Decimal):
        self.total_debits = total_debits
        self.total_credits = total_credits
        self.imbalance = imbalance
        super().__init__(
            f"Transaction is not balanced: debits={total_debits}, "
            f"credits={total_credits}, imbalance={self.imbalance}"
        )


# Ledger-related exceptions


class LedgerError(LedgerKernelError):
    """Base exception for ledger and report errors."""

    code: str = "LEDGER_ERROR"


class InvalidTransactionError(LedgerError):
    """Something other than a constructed Transaction was posted."""

    code: str = "INVALID_TRANSACTION"

    def __init__(self, value: Any):
        self.received_type = type(value).__name__
        super().__init__(
            f"Only a Transaction can be posted, got {self.received_type}"
        )


class InvalidLedgerError(LedgerError):
    """A trial balance was requested over something other than a Ledger."""

    code: str = "INVALID_LEDGER"

    def __init__(self, value: Any):
        self.received_type = type(value).__name__
        super().__init__(f"Must provide a Ledger, got {self.received_type}")


class InvalidTrialBalanceRowError(LedgerError):
    """A trial balance row does not carry exactly one non-negative column."""

    code: str = "INVALID_TRIAL_BALANCE_ROW"

    def __init__(self, account: Any, reason: str):
        self.account = account
        self.reason = reason
        super().__init__(f"Invalid trial balance row for {account}: {reason}")


# Configuration-related exceptions


class ConfigurationError(LedgerKernelError):
    """Base exception for chart-of-accounts configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class DuplicateAccountNumberError(ConfigurationError):
    """Two accounts in one chart share the same number."""

    code: str = "DUPLICATE_ACCOUNT_NUMBER"

    def __init__(self, number: int, names: tuple[str, ...]):
        self.number = number
        self.names = names
        super().__init__(
            f"Account number {number} is used by more than one account: "
            f"{', '.join(names)}"
        )


class AccountNotFoundError(ConfigurationError):
    """No account in the chart matches the requested key."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Account not found: {key!r}")
