"""Mode dispatch for the payoff calculator.

A *mode* is one of the calculations a user can ask for by name. Both shells
(the click CLI and the Flask app) collect a :class:`ModeRequest` and hand it
to :func:`run_mode`, which builds an engine, runs the calculation and returns
the formatted output as a :class:`~payoff_calc.result.Result`. Errors raised
by the engine or by input parsing come back as failed results.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Optional

from .config import DEFAULT_SETTINGS, EngineSettings
from .data_models import Balance
from .engine import AmortizationEngine, Trace
from .exceptions import MalformedAmountError, PayoffCalcError, UnrecognizedModeError
from .formatter import (
    format_balance,
    format_bimonthly,
    format_comparison,
    format_minimum_payment,
    format_series,
)
from .result import Result

MODES = ("help", "minpay", "payseries", "nextbal", "bipay", "compare")

MODE_HELP = (
    "minpay: give the number of months you want the loan paid off in. "
    "Shows the minimum monthly payment needed to do that.\n\n"
    "payseries: give a payment and the number of months to make it. "
    "Shows the balance at the end of each month.\n\n"
    "nextbal: shows next month's balance if interest accrues for the whole month "
    "with no payment.\n\n"
    "bipay: give a payment to split into two equal halves, paid on the 15th and on "
    "the 5th of the following month. Shows the balance after the second half.\n\n"
    "compare: compares splitting a payment in two and paying twice a month against "
    "paying the whole amount once. Shows how much interest the split saves."
)


@dataclass
class ModeRequest:
    """Inputs for one calculator run.

    ``payment`` is needed by ``payseries``, ``bipay`` and ``compare``;
    ``months`` by ``minpay`` and ``payseries``.
    """

    principal: Decimal
    interest: Decimal
    month: int
    payment: Optional[Decimal] = None
    months: Optional[int] = None
    stop_on_payoff: bool = True


def _require_payment(request: ModeRequest) -> Decimal:
    if request.payment is None:
        raise MalformedAmountError("", "payment amount")
    return request.payment


def _require_months(request: ModeRequest) -> int:
    if request.months is None:
        raise MalformedAmountError("", "number of months")
    if request.months < 0:
        raise MalformedAmountError(request.months, "number of months")
    return request.months


def _minpay(engine: AmortizationEngine, request: ModeRequest) -> str:
    months = _require_months(request)
    if months < 1:
        raise MalformedAmountError(months, "number of months")
    payment = engine.solve_minimum_payment(months)
    return format_minimum_payment(payment, months)


def _payseries(engine: AmortizationEngine, request: ModeRequest) -> str:
    snapshots = engine.run_payment_series(
        _require_payment(request), _require_months(request), request.stop_on_payoff
    )
    return format_series(snapshots)


def _nextbal(engine: AmortizationEngine, request: ModeRequest) -> str:
    return format_balance(engine.accrue_one_month())


def _bipay(engine: AmortizationEngine, request: ModeRequest) -> str:
    return format_bimonthly(engine.run_bimonthly_series(_require_payment(request)))


def _compare(engine: AmortizationEngine, request: ModeRequest) -> str:
    return format_comparison(engine.compare_monthly_vs_bimonthly(_require_payment(request)))


_HANDLERS: Dict[str, Callable[[AmortizationEngine, ModeRequest], str]] = {
    "minpay": _minpay,
    "payseries": _payseries,
    "nextbal": _nextbal,
    "bipay": _bipay,
    "compare": _compare,
}


def run_mode(
    mode: str,
    request: ModeRequest,
    settings: EngineSettings = DEFAULT_SETTINGS,
    trace: Optional[Trace] = None,
) -> Result[str]:
    """Run ``mode`` against the balance described by ``request``.

    Returns a successful result holding the formatted output, or a failed
    result carrying the error message and its ``error_type`` code.
    """
    mode = (mode or "").strip().lower()
    try:
        if mode not in MODES:
            raise UnrecognizedModeError(mode)
        if mode == "help":
            return Result.ok(MODE_HELP)
        balance = Balance(principal=request.principal, interest_due=request.interest)
        engine = AmortizationEngine(balance, request.month, settings, trace)
        return Result.ok(_HANDLERS[mode](engine, request))
    except PayoffCalcError as exc:
        return Result.fail(str(exc), exc.error_type)
