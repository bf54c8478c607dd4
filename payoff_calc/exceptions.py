"""Exceptions raised by the payoff calculator.

Every error carries an ``error_type`` code so the mode dispatcher can turn it
into a failed :class:`~payoff_calc.result.Result` without inspecting the
message text.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional


class PayoffCalcError(Exception):
    """Base exception for all payoff calculator errors."""

    error_type = "ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class InvalidMonthError(PayoffCalcError, ValueError):
    """Raised when a month number falls outside 1-12."""

    error_type = "INVALID_MONTH"

    def __init__(self, month: Any):
        super().__init__(
            f"Not a valid month: {month}. Must be a number from 1 to 12",
            {"month": month},
        )


class MalformedAmountError(PayoffCalcError, ValueError):
    """Raised when an amount or count cannot be parsed from text."""

    error_type = "MALFORMED_AMOUNT"

    def __init__(self, value: Any, what: str = "numeric value"):
        super().__init__(f"Invalid {what}: {value}", {"value": value})


class SearchDidNotConvergeError(PayoffCalcError):
    """Raised when the payoff search cannot get within tolerance of zero."""

    error_type = "SEARCH_DID_NOT_CONVERGE"

    def __init__(self, months: int, iterations: int, low: Decimal, high: Decimal):
        super().__init__(
            f"Could not find a payment that pays off the loan in {months} months "
            f"after {iterations} attempts (last range {low:.2f} to {high:.2f})",
            {"months": months, "iterations": iterations, "low": low, "high": high},
        )


class UnrecognizedModeError(PayoffCalcError, ValueError):
    """Raised when the requested mode is not one the calculator knows."""

    error_type = "UNRECOGNIZED_MODE"

    def __init__(self, mode: str):
        super().__init__(
            f'Not a valid mode: {mode}. Type "help" to get a list of modes and what they do.',
            {"mode": mode},
        )
