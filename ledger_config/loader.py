"""
Chart of Accounts Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a YAML chart-of-accounts file and parses it into kernel ``Account``
values held by a ``ChartOfAccounts``.

Architecture position
---------------------
**Config layer** -- boundary tooling above ``ledger_kernel``. The kernel
never imports this package.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``name``/``type`` on an account  -> ``KeyError`` propagates.
* Unknown account type  -> ``InvalidAccountTypeError``.
* Duplicate account numbers  -> ``DuplicateAccountNumberError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import ChartOfAccounts
from ledger_kernel.domain.account import Account
from ledger_kernel.logging_config import get_logger

logger = get_logger("config.loader")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Postconditions:
        - Returns a ``dict`` (empty if the YAML is empty).
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_account(data: dict[str, Any]) -> Account:
    """Parse one account entry. ``number`` and ``description`` are optional."""
    return Account(
        name=data["name"],
        account_type=data["type"],
        number=data.get("number"),
        description=data.get("description"),
    )


def parse_chart(data: dict[str, Any]) -> ChartOfAccounts:
    """Parse a whole chart document."""
    return ChartOfAccounts(
        name=data.get("name", "chart_of_accounts"),
        accounts=tuple(parse_account(a) for a in data.get("accounts") or ()),
    )


def load_chart_of_accounts(path: Path | str) -> ChartOfAccounts:
    """Load and validate a chart of accounts from a YAML file."""
    path = Path(path)
    chart = parse_chart(load_yaml_file(path))
    logger.info(
        "chart_of_accounts_loaded",
        extra={
            "path": str(path),
            "chart_name": chart.name,
            "account_count": len(chart),
            "checksum": chart.checksum,
        },
    )
    return chart
