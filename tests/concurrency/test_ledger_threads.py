"""
Thread-safety of the Ledger's single lock.

The kernel offers no concurrent semantics beyond making each public call
atomic: posts from many threads all land, and readers never observe a
half-appended transaction.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

from ledger_kernel.domain.transaction import Transaction
from ledger_kernel.selectors.trial_balance import TrialBalance
from ledger_kernel.services.ledger import Ledger

THREADS = 8
POSTS_PER_THREAD = 250


def _compound(cash, receivables, revenue) -> Transaction:
    return Transaction.create(
        "Split sale",
        date(2024, 1, 1),
        [
            {"account": cash, "debit": Decimal("1.10")},
            {"account": receivables, "debit": Decimal("0.90")},
            {"account": revenue, "credit": Decimal("2.00")},
        ],
    )


class TestConcurrentPosting:

    def test_all_posts_land(self, cash, receivables, revenue):
        ledger = Ledger()
        txn = _compound(cash, receivables, revenue)

        def worker():
            for _ in range(POSTS_PER_THREAD):
                ledger.post(txn)

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            for future in [pool.submit(worker) for _ in range(THREADS)]:
                future.result()

        total = THREADS * POSTS_PER_THREAD
        assert ledger.transaction_count == total
        assert ledger.posting_count == total * 3
        assert ledger.balance(revenue) == Decimal("2.00") * total
        assert ledger.is_balanced

    def test_readers_never_see_partial_transaction(self, cash, receivables, revenue):
        ledger = Ledger()
        txn = _compound(cash, receivables, revenue)
        stop = threading.Event()
        failures: list[str] = []

        def writer():
            for _ in range(POSTS_PER_THREAD):
                ledger.post(txn)
            stop.set()

        def reader():
            while not stop.is_set():
                if len(ledger.postings) % 3:
                    failures.append("postings snapshot split a transaction")
                tb = TrialBalance.create(ledger, date(2024, 1, 1))
                if not tb.is_balanced:
                    failures.append(f"trial balance off by {tb.imbalance}")

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(3)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert failures == []


class TestCountersHonourLock:
    """Counters wait for an in-flight write instead of reading a half-appended ledger."""

    def test_counters_block_while_lock_held(self, sale_transaction):
        ledger = Ledger()
        readers = {
            "posting_count": lambda: ledger.posting_count,
            "transaction_count": lambda: ledger.transaction_count,
            "is_empty": lambda: ledger.is_empty,
            "len": lambda: len(ledger),
        }
        results: dict[str, object] = {}
        threads = [
            threading.Thread(target=lambda n=name, f=read: results.__setitem__(n, f()))
            for name, read in readers.items()
        ]

        with ledger._lock:
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=0.1)
            assert results == {}
            ledger.post(sale_transaction)

        for t in threads:
            t.join()
        assert results == {
            "posting_count": 2,
            "transaction_count": 1,
            "is_empty": False,
            "len": 2,
        }
