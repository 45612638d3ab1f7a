"""
Chart of Accounts schema (``ledger_config.schema``).

Frozen container for the accounts loaded from configuration. The kernel's
Account leaves number uniqueness to its owner; ChartOfAccounts is that
owner and rejects duplicates at construction.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ledger_kernel.domain.account import Account, AccountType, to_account_type
from ledger_kernel.exceptions import AccountNotFoundError, DuplicateAccountNumberError


def compute_checksum(data: Any) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Returns a hex-encoded SHA-256 hash string.
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


@dataclass(frozen=True)
class ChartOfAccounts:
    """
    A named, ordered set of accounts with unique numbers.

    Raises:
        DuplicateAccountNumberError: if two accounts share a number.
    """

    name: str
    accounts: tuple[Account, ...] = field(default=())

    def __post_init__(self) -> None:
        accounts = tuple(self.accounts)
        seen: dict[int, Account] = {}
        for account in accounts:
            if account.number in seen:
                raise DuplicateAccountNumberError(
                    account.number, (seen[account.number].name, account.name)
                )
            seen[account.number] = account
        object.__setattr__(self, "accounts", accounts)

    def get(self, number: int) -> Account:
        for account in self.accounts:
            if account.number == number:
                return account
        raise AccountNotFoundError(number)

    def by_name(self, name: str) -> Account:
        for account in self.accounts:
            if account.name == name:
                return account
        raise AccountNotFoundError(name)

    def of_type(self, account_type: AccountType | str) -> tuple[Account, ...]:
        wanted = to_account_type(account_type)
        return tuple(a for a in self.accounts if a.account_type is wanted)

    @property
    def checksum(self) -> str:
        """Order-independent fingerprint of the chart's contents."""
        return compute_checksum({
            "name": self.name,
            "accounts": sorted(
                (
                    {
                        "number": a.number,
                        "name": a.name,
                        "type": a.account_type.value,
                        "description": a.description,
                    }
                    for a in self.accounts
                ),
                key=lambda d: d["number"],
            ),
        })

    def __contains__(self, item: object) -> bool:
        return item in self.accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts)

    def __len__(self) -> int:
        return len(self.accounts)
