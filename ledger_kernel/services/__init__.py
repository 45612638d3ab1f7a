"""Stateful kernel services."""

from ledger_kernel.services.ledger import Ledger

__all__ = ["Ledger"]
