"""Output helpers for the payoff calculator.

These functions render engine results as plain text. They return strings
rather than printing so the same output can be echoed by the CLI or shown on
the web page. Amounts are rounded half-even to the cent for display only.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from .data_models import Balance, PaymentComparison
from .utils import round_display


def format_currency(value: Decimal) -> str:
    return f"$ {round_display(value):,.2f}"


def format_balance(balance: Balance) -> str:
    return str(balance)


def format_series(snapshots: Iterable[Balance]) -> str:
    """Render the balance after each month of a payment series.

    The first month whose principal is zero or below is reported as the month
    the loan was paid off.
    """
    blocks: List[str] = []
    paid_off = False
    for month, balance in enumerate(snapshots, start=1):
        blocks.append(f"Balance in {month} month(s):\n{format_balance(balance)}")
        if not paid_off and balance.principal <= 0:
            blocks.append(f"Loan is fully paid after month {month}")
            paid_off = True
    return "\n\n".join(blocks)


def format_minimum_payment(payment: Decimal, months: int) -> str:
    return (
        f"The minimum monthly payment is {format_currency(payment)} "
        f"for the loan to be paid off in {months} months"
    )


def format_bimonthly(balance: Balance) -> str:
    return f"Balance after payment on 5th:\n{format_balance(balance)}"


def format_comparison(comparison: PaymentComparison) -> str:
    """Render a monthly versus bimonthly comparison."""
    lines = [
        f"After bimonthly principal: {format_currency(comparison.bimonthly_principal)}",
        f"After monthly principal: {format_currency(comparison.monthly_principal)}",
        "",
        f"Principal reduction with bimonthly payments: "
        f"{format_currency(comparison.bimonthly_reduction)}",
        f"Principal reduction with monthly payments: "
        f"{format_currency(comparison.monthly_reduction)}",
        f"By splitting {format_currency(comparison.payment)} in half and paying 2x a month, "
        f"you saved {format_currency(comparison.interest_saved)} in interest",
    ]
    return "\n".join(lines)
