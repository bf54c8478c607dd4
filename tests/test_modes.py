from decimal import Decimal

import pytest

from payoff_calc.config import EngineSettings
from payoff_calc.modes import MODE_HELP, MODES, ModeRequest, run_mode


def request(**kwargs):
    values = {"principal": Decimal("5500.00"), "interest": Decimal("12.00"), "month": 1}
    values.update(kwargs)
    return ModeRequest(**values)


def test_known_modes():
    assert MODES == ("help", "minpay", "payseries", "nextbal", "bipay", "compare")


def test_help_mode():
    result = run_mode("help", request())
    assert result.success
    assert result.value == MODE_HELP
    for mode in MODES[1:]:
        assert f"{mode}:" in MODE_HELP


def test_mode_names_are_case_insensitive():
    assert run_mode(" NextBal ", request()).success


def test_unrecognized_mode():
    result = run_mode("payoff", request())
    assert not result
    assert result.error_type == "UNRECOGNIZED_MODE"
    assert "Not a valid mode: payoff" in result.error


def test_nextbal():
    result = run_mode("nextbal", request())
    assert result.value == "Principal: $ 5,500.00\nInterest: $ 35.93"


def test_minpay():
    result = run_mode("minpay", request(months=12))
    assert result.success
    assert result.value.startswith("The minimum monthly payment is $ 4")
    assert result.value.endswith("for the loan to be paid off in 12 months")


def test_minpay_traces_guesses():
    lines = []
    run_mode("minpay", request(months=12), trace=lines.append)
    assert lines[0].startswith("Trying amount $ 2756.00")


@pytest.mark.parametrize("months", [None, 0, -3])
def test_minpay_needs_positive_months(months):
    result = run_mode("minpay", request(months=months))
    assert result.error_type == "MALFORMED_AMOUNT"


def test_minpay_search_failure():
    result = run_mode("minpay", request(principal=Decimal("100"), interest=Decimal("500"), months=1))
    assert result.error_type == "SEARCH_DID_NOT_CONVERGE"


def test_minpay_uses_given_settings():
    result = run_mode("minpay", request(months=12), settings=EngineSettings(max_iterations=2))
    assert result.error_type == "SEARCH_DID_NOT_CONVERGE"


def test_payseries_stops_on_payoff_by_default():
    result = run_mode(
        "payseries",
        request(principal=Decimal("100"), interest=Decimal("0"), payment=Decimal("60"), months=5),
    )
    assert "Balance in 2 month(s)" in result.value
    assert "Balance in 3 month(s)" not in result.value
    assert result.value.endswith("Loan is fully paid after month 2")


def test_payseries_can_run_all_months():
    result = run_mode(
        "payseries",
        request(
            principal=Decimal("100"),
            interest=Decimal("0"),
            payment=Decimal("60"),
            months=5,
            stop_on_payoff=False,
        ),
    )
    assert "Balance in 5 month(s)" in result.value
    assert result.value.count("Loan is fully paid") == 1


def test_payseries_needs_payment():
    result = run_mode("payseries", request(months=3))
    assert result.error_type == "MALFORMED_AMOUNT"


def test_bipay():
    result = run_mode("bipay", request(interest=Decimal("0"), month=4, payment=Decimal("1000")))
    assert result.value.startswith("Balance after payment on 5th:\nPrincipal: $ 4,521.78")


def test_compare():
    result = run_mode("compare", request(interest=Decimal("0"), month=4, payment=Decimal("1000")))
    assert "you saved $ 1.38 in interest" in result.value


def test_invalid_month_is_a_failed_result():
    result = run_mode("nextbal", request(month=13))
    assert result.error_type == "INVALID_MONTH"


def test_nextbal_handles_very_large_principal():
    result = run_mode("nextbal", request(principal=Decimal("1e27"), interest=Decimal("0")))
    assert result.success
    assert result.value.startswith("Principal: $ 1,000,000,000,000,000,000,000,000,000.00\n")


def test_payseries_handles_very_large_principal():
    result = run_mode(
        "payseries",
        request(principal=Decimal("1e26"), payment=Decimal("100"), months=2),
    )
    assert result.success
    assert "Balance in 2 month(s)" in result.value
