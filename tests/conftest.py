"""
Pytest fixtures for the ledger kernel test suite.

Provides:
- Structured logging configuration and capture
- A standard small-business set of accounts
- Empty and pre-populated ledgers
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from ledger_kernel.domain.account import Account, AccountType
from ledger_kernel.domain.transaction import Transaction
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.services.ledger import Ledger

TEST_DATE = date(2024, 1, 15)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, ledger):
            ledger.post(txn)
            logs = captured_logs()
            assert any(r["event"] == "transaction_posted" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Accounts
# =============================================================================


@pytest.fixture
def cash() -> Account:
    return Account("Cash", AccountType.ASSET, 1000)


@pytest.fixture
def receivables() -> Account:
    return Account("Accounts Receivable", AccountType.ASSET, 1100)


@pytest.fixture
def payables() -> Account:
    return Account("Accounts Payable", AccountType.LIABILITY, 2000)


@pytest.fixture
def owner_equity() -> Account:
    return Account("Owner's Capital", AccountType.EQUITY, 3000)


@pytest.fixture
def revenue() -> Account:
    return Account("Sales Revenue", AccountType.INCOME, 4100)


@pytest.fixture
def rent_expense() -> Account:
    return Account("Rent Expense", AccountType.EXPENSE, 5100)


# =============================================================================
# Ledgers
# =============================================================================


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture
def sale_transaction(cash, revenue) -> Transaction:
    """Cash sale: DR Cash 100 / CR Sales Revenue 100."""
    return Transaction.create(
        "Cash sale",
        TEST_DATE,
        [
            {"account": cash, "debit": Decimal("100")},
            {"account": revenue, "credit": Decimal("100")},
        ],
    )


@pytest.fixture
def rent_transaction(cash, rent_expense) -> Transaction:
    """Rent paid: DR Rent Expense 30 / CR Cash 30."""
    return Transaction.create(
        "Rent",
        date(2024, 1, 31),
        [
            {"account": rent_expense, "debit": Decimal("30")},
            {"account": cash, "credit": Decimal("30")},
        ],
    )


@pytest.fixture
def posted_ledger(ledger, sale_transaction, rent_transaction) -> Ledger:
    """Ledger holding the sale and the rent payment."""
    return ledger.post(sale_transaction).post(rent_transaction)
