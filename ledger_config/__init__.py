"""
ledger_config -- chart-of-accounts configuration.

Responsibility:
    Turns YAML chart-of-accounts files into validated kernel ``Account``
    values. This package sits above ``ledger_kernel``; the kernel MUST NEVER
    import from ``ledger_config``.

Invariants enforced:
    - Account numbers are unique within a chart.
    - Same YAML content always produces the same checksum.
"""

from ledger_config.loader import (
    load_chart_of_accounts,
    load_yaml_file,
    parse_account,
    parse_chart,
)
from ledger_config.schema import ChartOfAccounts, compute_checksum

__all__ = [
    "ChartOfAccounts",
    "compute_checksum",
    "load_chart_of_accounts",
    "load_yaml_file",
    "parse_account",
    "parse_chart",
]
