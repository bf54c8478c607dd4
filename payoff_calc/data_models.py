"""Data models for the payoff calculator.

This module defines the dataclasses passed between the engine and its
callers: the mutable :class:`Balance` the engine works on, and the
:class:`PaymentComparison` produced when comparing bimonthly and monthly
payments.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from .utils import round_display


@dataclass
class Balance:
    """Outstanding amounts on a loan.

    Attributes
    ----------
    principal: Decimal
        The outstanding loan balance interest accrues on. A negative value
        means the loan has been overpaid.
    interest_due: Decimal
        Interest that has accrued but not yet been paid. Payments settle this
        before any money reaches the principal.

    Values are kept at full precision. Only ``str()`` rounds them.
    """

    principal: Decimal
    interest_due: Decimal

    def copy(self) -> "Balance":
        return replace(self)

    def __str__(self) -> str:
        return (
            f"Principal: $ {round_display(self.principal):,.2f}\n"
            f"Interest: $ {round_display(self.interest_due):,.2f}"
        )


@dataclass(frozen=True)
class PaymentComparison:
    """Outcome of paying an amount in two halves versus once a month.

    Reductions are measured against the principal before either payment;
    ``interest_saved`` is how much more principal the split payment retires.
    """

    payment: Decimal
    starting_principal: Decimal
    bimonthly_principal: Decimal
    monthly_principal: Decimal
    bimonthly_reduction: Decimal
    monthly_reduction: Decimal
    interest_saved: Decimal
