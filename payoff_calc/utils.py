"""Utility functions for the payoff calculator.

This module provides helpers for turning user input into the engine's types
(``Decimal`` amounts, month numbers and month counts), rounding amounts to the
cent, and stepping the month index forward with wraparound.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_HALF_EVEN, Context, Decimal, InvalidOperation
from typing import Union

from .exceptions import InvalidMonthError, MalformedAmountError

CENT = Decimal("0.01")

_SUFFIXES = {"k": Decimal(1_000), "m": Decimal(1_000_000)}


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    Commas are stripped so ``"5,500.00"`` is accepted. Raises
    ``MalformedAmountError`` if conversion fails or the value is not finite.
    """
    try:
        cleaned = str(value).strip().replace(",", "")
        result = Decimal(cleaned)
    except (InvalidOperation, ValueError) as exc:
        raise MalformedAmountError(value) from exc
    if not result.is_finite():
        raise MalformedAmountError(value)
    return result


def parse_amount(value: str) -> Decimal:
    """Parse a currency amount with optional ``k``/``m`` shorthand.

    ``"5500"``, ``"5,500.00"`` and ``"5.5k"`` all give ``Decimal("5500")``
    (up to trailing zeros).
    """
    text = str(value).strip().lower().replace(",", "")
    factor = Decimal(1)
    if text and text[-1] in _SUFFIXES:
        factor = _SUFFIXES[text[-1]]
        text = text[:-1]
    try:
        return decimal_from_str(text) * factor
    except MalformedAmountError as exc:
        raise MalformedAmountError(value, "amount") from exc


def parse_month(value: Union[str, int]) -> int:
    """Parse a month number in the range 1-12."""
    try:
        month = int(str(value).strip())
    except ValueError as exc:
        raise InvalidMonthError(value) from exc
    if not 1 <= month <= 12:
        raise InvalidMonthError(value)
    return month


def parse_month_count(value: Union[str, int]) -> int:
    """Parse a non-negative number of months."""
    try:
        months = int(str(value).strip())
    except ValueError as exc:
        raise MalformedAmountError(value, "number of months") from exc
    if months < 0:
        raise MalformedAmountError(value, "number of months")
    return months


def next_month(month: int) -> int:
    """Return the month after ``month``, wrapping December to January."""
    return 1 if month == 12 else month + 1


def _cent_context(amount: Decimal) -> Context:
    # wide enough to hold every digit of amount down to the cent
    return Context(prec=max(28, amount.adjusted() + 3))


def round_display(amount: Decimal) -> Decimal:
    """Round an amount to the cent for display (round-half-even)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_EVEN, context=_cent_context(amount))


def round_up_to_cent(amount: Decimal) -> Decimal:
    """Round an amount up (towards positive infinity) to the cent."""
    return amount.quantize(CENT, rounding=ROUND_CEILING, context=_cent_context(amount))
