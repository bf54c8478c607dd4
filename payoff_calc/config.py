"""Calculation settings for the payoff calculator.

All constants the engine depends on (interest rate, day-count basis, decimal
precision, search tolerance and iteration cap, interest-posting rounding) are
collected into one immutable :class:`EngineSettings`. The daily rate and the
decimal context are derived once when the settings are built and never
recomputed per call; the global ``decimal`` context is left untouched.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import Mapping, Optional

from .exceptions import MalformedAmountError
from .utils import decimal_from_str

ENV_PREFIX = "PAYOFF_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineSettings:
    """Immutable configuration shared by every engine instance.

    Attributes
    ----------
    annual_rate: Decimal
        Annual interest rate as a fraction (``0.05125`` is 5.125 %).
    day_count_basis: Decimal
        Number of days the annual rate is spread over to get a daily rate.
    precision: int
        Significant digits used for every intermediate result. Division and
        multiplication round half-even at this precision.
    epsilon: Decimal
        How close to zero the final principal must be for the payoff search
        to accept a payment.
    max_iterations: int
        Upper bound on payoff search iterations.
    round_postings: bool
        When true, interest posted onto a balance is rounded up to the cent.
    """

    annual_rate: Decimal = Decimal("0.05125")
    day_count_basis: Decimal = Decimal("365.25")
    precision: int = 20
    epsilon: Decimal = Decimal("1.00")
    max_iterations: int = 200
    round_postings: bool = True

    context: Context = field(init=False, repr=False, compare=False)
    daily_rate: Decimal = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.precision < 1:
            raise ValueError("Precision must be positive")
        if self.max_iterations < 1:
            raise ValueError("Max iterations must be positive")
        if self.day_count_basis <= 0:
            raise ValueError("Day count basis must be positive")
        context = Context(prec=self.precision, rounding=ROUND_HALF_EVEN)
        object.__setattr__(self, "context", context)
        object.__setattr__(
            self, "daily_rate", context.divide(self.annual_rate, self.day_count_basis)
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Build settings from ``PAYOFF_*`` environment variables.

        Unset variables keep their defaults. Values that cannot be parsed
        raise ``MalformedAmountError``.
        """
        env = os.environ if environ is None else environ
        overrides = {}

        for name in ("annual_rate", "day_count_basis", "epsilon"):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw:
                overrides[name] = decimal_from_str(raw)

        for name in ("precision", "max_iterations"):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw:
                try:
                    overrides[name] = int(raw)
                except ValueError as exc:
                    raise MalformedAmountError(raw, name.replace("_", " ")) from exc

        raw = env.get(ENV_PREFIX + "ROUND_POSTINGS")
        if raw:
            flag = raw.strip().lower()
            if flag in _TRUE_VALUES:
                overrides["round_postings"] = True
            elif flag in _FALSE_VALUES:
                overrides["round_postings"] = False
            else:
                raise MalformedAmountError(raw, "round postings flag")

        return cls(**overrides)


DEFAULT_SETTINGS = EngineSettings()
