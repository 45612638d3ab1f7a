"""
Values -- Primitive domain value types and their boundary conversions.

Responsibility:
    Provides the Side enumeration and the exact-decimal / date conversions
    every other domain module uses. Amounts are Decimal everywhere; binary
    floating point never reaches balance math.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module.

Invariants enforced:
    positive_amounts -- to_positive_amount() rejects zero, negatives, floats,
                        NaN and infinities
    exact sums       -- sum_amounts() and subtract_amounts() never round

Failure modes:
    - InvalidAmountError for non-decimal or non-positive amounts
    - InvalidSideError for anything other than debit/credit
    - InvalidDateError for non-date values
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from enum import Enum
from typing import Any

from ledger_kernel.exceptions import (
    InvalidAmountError,
    InvalidDateError,
    InvalidSideError,
)

ZERO = Decimal("0")


class Side(str, Enum):
    """
    Which side of a transaction a posting is on.

    Contract:
        Exactly two values: DEBIT and CREDIT. Also used as the normal
        balance of an account type.
    """

    DEBIT = "debit"
    CREDIT = "credit"

    @property
    def opposite(self) -> Side:
        return Side.CREDIT if self is Side.DEBIT else Side.DEBIT

    @property
    def abbreviation(self) -> str:
        return "DR" if self is Side.DEBIT else "CR"


def to_side(value: Any) -> Side:
    """
    Normalize a side value.

    Accepts a Side or a case-insensitive "debit"/"credit" string.

    Raises:
        InvalidSideError: for anything else.
    """
    if isinstance(value, Side):
        return value
    if isinstance(value, str):
        try:
            return Side(value.strip().lower())
        except ValueError:
            pass
    raise InvalidSideError(value)


def to_decimal(value: Any) -> Decimal:
    """
    Convert an amount to an exact Decimal.

    Decimal and int are exact. Strings are parsed with Decimal(). Floats and
    bools are rejected; so are NaN and infinities.

    Raises:
        InvalidAmountError: if the value has no exact decimal form.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmountError(value, "binary floating point is not accepted")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidAmountError(value, "not a decimal number") from e
    else:
        raise InvalidAmountError(
            value, f"expected Decimal, int or str, got {type(value).__name__}"
        )
    if not result.is_finite():
        raise InvalidAmountError(value, "amount must be finite")
    return result


def to_positive_amount(value: Any) -> Decimal:
    """
    Convert an amount and require it to be strictly positive.

    Raises:
        InvalidAmountError: if the amount is zero or negative. Use the
            opposite side to record a reduction.
    """
    amount = to_decimal(value)
    if amount <= ZERO:
        raise InvalidAmountError(
            value,
            "amount must be positive; use the opposite side for reductions",
        )
    return amount


def to_date(value: Any) -> date:
    """
    Require a date. A datetime is narrowed to its date.

    Raises:
        InvalidDateError: for anything that is not a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidDateError(value)


def _exact_context() -> Context:
    # Adding or subtracting finite Decimals never rounds at this precision.
    # Inexact stays trapped all the same.
    return Context(
        prec=MAX_PREC,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[Inexact, InvalidOperation, Overflow],
    )


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """
    Sum Decimals exactly, starting from zero.

    The default decimal context keeps 28 significant digits, so
    ``Decimal("1") + Decimal("1E-28")`` would round back to 1. Balance math
    runs in an unrounded context instead.

    Raises:
        InvalidAmountError: if the sum cannot be represented exactly.
    """
    total = ZERO
    with localcontext(_exact_context()):
        for amount in amounts:
            try:
                total += amount
            except Inexact as e:
                raise InvalidAmountError(amount, "sum is not exactly representable") from e
    return total


def subtract_amounts(minuend: Decimal, subtrahend: Decimal) -> Decimal:
    """
    Exact ``minuend - subtrahend``.

    Raises:
        InvalidAmountError: if the difference cannot be represented exactly.
    """
    with localcontext(_exact_context()):
        try:
            return minuend - subtrahend
        except Inexact as e:
            raise InvalidAmountError(
                subtrahend, "difference is not exactly representable"
            ) from e
