from decimal import Decimal

import pytest

from payoff_calc.config import DEFAULT_SETTINGS, EngineSettings
from payoff_calc.exceptions import MalformedAmountError


def test_default_settings():
    assert DEFAULT_SETTINGS.annual_rate == Decimal("0.05125")
    assert DEFAULT_SETTINGS.day_count_basis == Decimal("365.25")
    assert DEFAULT_SETTINGS.epsilon == Decimal("1.00")
    assert DEFAULT_SETTINGS.round_postings is True


def test_daily_rate_is_computed_once_at_configured_precision():
    settings = EngineSettings()
    assert settings.daily_rate == settings.context.divide(Decimal("0.05125"), Decimal("365.25"))
    assert len(settings.daily_rate.as_tuple().digits) == 20
    assert Decimal("0.00014031") < settings.daily_rate < Decimal("0.00014032")


def test_settings_are_immutable():
    with pytest.raises(AttributeError):
        DEFAULT_SETTINGS.annual_rate = Decimal("0.1")


def test_settings_compare_by_value():
    assert EngineSettings() == DEFAULT_SETTINGS
    assert EngineSettings(precision=30) != DEFAULT_SETTINGS


@pytest.mark.parametrize("kwargs", [{"precision": 0}, {"max_iterations": 0}, {"day_count_basis": Decimal("0")}])
def test_settings_reject_nonsense(kwargs):
    with pytest.raises(ValueError):
        EngineSettings(**kwargs)


def test_from_env_uses_defaults_when_unset():
    assert EngineSettings.from_env({}) == DEFAULT_SETTINGS


def test_from_env_reads_overrides():
    settings = EngineSettings.from_env(
        {
            "PAYOFF_ANNUAL_RATE": "0.06",
            "PAYOFF_DAY_COUNT_BASIS": "365",
            "PAYOFF_PRECISION": "28",
            "PAYOFF_EPSILON": "0.50",
            "PAYOFF_MAX_ITERATIONS": "50",
            "PAYOFF_ROUND_POSTINGS": "no",
        }
    )
    assert settings.annual_rate == Decimal("0.06")
    assert settings.day_count_basis == Decimal("365")
    assert settings.precision == 28
    assert settings.epsilon == Decimal("0.50")
    assert settings.max_iterations == 50
    assert settings.round_postings is False


@pytest.mark.parametrize(
    "env",
    [
        {"PAYOFF_ANNUAL_RATE": "five"},
        {"PAYOFF_PRECISION": "high"},
        {"PAYOFF_ROUND_POSTINGS": "maybe"},
    ],
)
def test_from_env_rejects_bad_values(env):
    with pytest.raises(MalformedAmountError):
        EngineSettings.from_env(env)
