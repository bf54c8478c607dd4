"""Core calculation engine for the payoff calculator.

This module implements the amortization rules: daily interest accrual over
fixed-length months, the interest-first payment waterfall, month-by-month
payment series, a binary search for the payment that retires the loan in a
given number of months, and split (bimonthly) payments.

Interest that is *posted* onto a balance is rounded up to the cent when the
settings ask for it (the default). Interest amounts returned to the caller by
``monthly_interest_accrued`` and ``interest_accrued`` are never rounded, so
chained calculations keep full precision.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict, Iterator, Optional

from .config import DEFAULT_SETTINGS, EngineSettings
from .data_models import Balance, PaymentComparison
from .exceptions import InvalidMonthError, SearchDidNotConvergeError
from .utils import next_month, round_up_to_cent

# February is always 28 days; no leap years.
DAYS_IN_MONTH: Dict[int, int] = {
    1: 31,
    2: 28,
    3: 31,
    4: 30,
    5: 31,
    6: 30,
    7: 31,
    8: 31,
    9: 30,
    10: 31,
    11: 30,
    12: 31,
}

# Bimonthly payments fall on the 15th and on the 5th of the following month.
FIRST_LEG_DAYS = 10
SECOND_LEG_DAYS: Dict[int, int] = {28: 18, 30: 20, 31: 21}

Trace = Callable[[str], None]


def days_in_month(month: int) -> int:
    """Return the number of days in ``month`` (1-12)."""
    if not isinstance(month, int) or isinstance(month, bool) or month not in DAYS_IN_MONTH:
        raise InvalidMonthError(month)
    return DAYS_IN_MONTH[month]


def _no_trace(message: str) -> None:
    pass


class AmortizationEngine:
    """Applies interest and payments to a :class:`Balance`.

    Parameters
    ----------
    balance: Balance
        The balance to operate on. The engine mutates it in place.
    current_month: int
        Month number (1-12) the next payment is made in.
    settings: EngineSettings
        Rates, precision and search limits.
    trace: Optional[Callable[[str], None]]
        Receives a line of progress text for each payoff search guess and each
        bimonthly payment.
    """

    def __init__(
        self,
        balance: Balance,
        current_month: int,
        settings: EngineSettings = DEFAULT_SETTINGS,
        trace: Optional[Trace] = None,
    ) -> None:
        days_in_month(current_month)
        self._balance = balance
        self._current_month = current_month
        self._settings = settings
        self._ctx = settings.context
        self._trace = trace or _no_trace

    @property
    def balance(self) -> Balance:
        return self._balance

    @property
    def current_month(self) -> int:
        return self._current_month

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def days_in_month(self, month: int) -> int:
        return days_in_month(month)

    def monthly_interest_accrued(self, month: int) -> Decimal:
        """Interest owed on the current principal over all of ``month``."""
        return self.interest_accrued(days_in_month(month))

    def interest_accrued(self, days: int) -> Decimal:
        """Interest owed on the current principal over ``days`` days."""
        if days < 0:
            raise ValueError("Days must not be negative")
        ctx = self._ctx
        return ctx.multiply(
            ctx.multiply(self._balance.principal, self._settings.daily_rate),
            Decimal(days),
        )

    def accrue_one_month(self, month: Optional[int] = None) -> Balance:
        """Return the balance after a month of interest with no payment.

        The engine's own balance is left unchanged. ``month`` defaults to the
        engine's current month.
        """
        if month is None:
            month = self._current_month
        interest = self._posting(self.monthly_interest_accrued(month))
        return Balance(
            principal=self._balance.principal,
            interest_due=self._ctx.add(self._balance.interest_due, interest),
        )

    def apply_payment(self, payment: Decimal) -> None:
        """Apply ``payment`` to interest due first, then to principal.

        Principal may go negative when the payment exceeds what is owed.
        """
        ctx = self._ctx
        balance = self._balance
        interest = balance.interest_due
        if payment <= interest:
            balance.interest_due = ctx.subtract(interest, payment)
        else:
            to_principal = ctx.subtract(payment, interest)
            balance.interest_due = Decimal("0.00")
            balance.principal = ctx.subtract(balance.principal, to_principal)

    def run_payment_series(
        self, payment: Decimal, months: int, stop_on_payoff: bool = False
    ) -> Iterator[Balance]:
        """Make ``payment`` once a month for ``months`` months.

        Each month the payment is applied, a month of interest is posted for
        the current month and the month index moves on. A snapshot of the
        balance is yielded after every month. The returned iterator is lazy:
        the engine's balance only reaches its final state once it has been
        exhausted.

        With ``stop_on_payoff`` the series ends after the first month whose
        principal is zero or below.
        """
        if months < 0:
            raise ValueError("Number of months must not be negative")
        return self._series(payment, months, stop_on_payoff)

    def _series(self, payment: Decimal, months: int, stop_on_payoff: bool) -> Iterator[Balance]:
        for _ in range(months):
            self.apply_payment(payment)
            self._post_interest(self.monthly_interest_accrued(self._current_month))
            self._current_month = next_month(self._current_month)
            snapshot = self._balance.copy()
            yield snapshot
            if stop_on_payoff and snapshot.principal <= 0:
                return

    def solve_minimum_payment(self, months_to_payoff: int) -> Decimal:
        """Binary search for the monthly payment that retires the loan.

        The search starts between the interest currently due and the current
        principal. A guess is accepted when the principal left after
        ``months_to_payoff`` payments is within ``settings.epsilon`` of zero.
        The engine's balance and month are restored before returning, also
        when the search fails.

        Raises
        ------
        SearchDidNotConvergeError
            If no acceptable payment is found within
            ``settings.max_iterations`` guesses.
        """
        if months_to_payoff < 1:
            raise ValueError("Months to payoff must be positive")

        ctx = self._ctx
        epsilon = self._settings.epsilon
        original = self._balance
        start_balance = original.copy()
        start_month = self._current_month

        low = start_balance.interest_due
        high = start_balance.principal
        two = Decimal(2)

        try:
            for _ in range(self._settings.max_iterations):
                self._balance = start_balance.copy()
                self._current_month = start_month

                guess = ctx.divide(ctx.add(low, high), two)
                self._trace(f"Trying amount $ {guess:.2f} for {months_to_payoff} months")

                for _snapshot in self.run_payment_series(guess, months_to_payoff):
                    pass
                final_principal = self.accrue_one_month(self._current_month).principal

                if abs(final_principal) <= epsilon:
                    return guess
                if final_principal > epsilon:
                    low = guess
                else:
                    high = guess
            raise SearchDidNotConvergeError(
                months_to_payoff, self._settings.max_iterations, low, high
            )
        finally:
            self._balance = original
            self._current_month = start_month

    def run_bimonthly_series(self, payment: Decimal) -> Balance:
        """Pay ``payment`` in two halves, on the 15th and the following 5th.

        Ten days of interest are posted before the first half. Before the
        second half, 20, 21 or 18 days are posted depending on whether the
        current month has 30, 31 or 28 days. The month index does not move.
        """
        half = self._ctx.divide(payment, Decimal(2))
        second_leg = SECOND_LEG_DAYS[days_in_month(self._current_month)]

        self._post_interest(self.interest_accrued(FIRST_LEG_DAYS))
        self._trace(f"Making payment on 15th with balance\n{self._balance}")
        self.apply_payment(half)

        self._post_interest(self.interest_accrued(second_leg))
        self._trace(f"Making payment on 5th with balance\n{self._balance}")
        self.apply_payment(half)

        return self._balance.copy()

    def compare_monthly_vs_bimonthly(self, payment: Decimal) -> PaymentComparison:
        """Compare a split bimonthly payment against one monthly payment.

        Both runs start from copies of the engine's balance; the engine itself
        is not changed.
        """
        ctx = self._ctx
        start = self._balance.principal

        bimonthly = self._fork()
        bimonthly.run_bimonthly_series(payment)
        bimonthly_principal = bimonthly.balance.principal

        monthly = self._fork()
        monthly._balance = monthly.accrue_one_month()
        monthly.apply_payment(payment)
        monthly_principal = monthly.balance.principal

        bimonthly_reduction = ctx.subtract(start, bimonthly_principal)
        monthly_reduction = ctx.subtract(start, monthly_principal)
        return PaymentComparison(
            payment=payment,
            starting_principal=start,
            bimonthly_principal=bimonthly_principal,
            monthly_principal=monthly_principal,
            bimonthly_reduction=bimonthly_reduction,
            monthly_reduction=monthly_reduction,
            interest_saved=ctx.subtract(bimonthly_reduction, monthly_reduction),
        )

    def _fork(self) -> "AmortizationEngine":
        return AmortizationEngine(
            self._balance.copy(), self._current_month, self._settings, self._trace
        )

    def _posting(self, interest: Decimal) -> Decimal:
        if self._settings.round_postings:
            return round_up_to_cent(interest)
        return interest

    def _post_interest(self, interest: Decimal) -> None:
        balance = self._balance
        balance.interest_due = self._ctx.add(balance.interest_due, self._posting(interest))
