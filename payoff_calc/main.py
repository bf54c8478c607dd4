"""Command‑line interface for the payoff calculator.

This module uses the ``click`` library to expose each calculator mode as a
subcommand, plus an ``interactive`` command that asks for the balance, the
mode and the mode's inputs one prompt at a time. Results are printed to the
terminal.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

import click

from .config import EngineSettings
from .exceptions import PayoffCalcError
from .modes import ModeRequest, run_mode
from .utils import parse_amount, parse_month, parse_month_count


def _as_bad_parameter(parser: Callable[[str], Any]) -> Callable[[str], Any]:
    """Wrap a parser so its errors are reported by click as bad parameters."""

    def convert(value: str) -> Any:
        try:
            return parser(value)
        except PayoffCalcError as exc:
            raise click.BadParameter(str(exc))

    return convert


prompt_amount = _as_bad_parameter(parse_amount)
prompt_month_count = _as_bad_parameter(parse_month_count)


def amount_option(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[Decimal]:
    if value is None:
        return None
    return prompt_amount(value)


def month_option(ctx: click.Context, param: click.Parameter, value: Any) -> int:
    return _as_bad_parameter(parse_month)(value)


def months_option(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    return prompt_month_count(value)


def balance_options(func: Callable) -> Callable:
    """Attach the options every mode needs: principal, interest and month."""
    func = click.option(
        "--month",
        "-m",
        "month",
        default=lambda: date.today().month,
        callback=month_option,
        help="Month number (1-12) of the next payment. Defaults to the current month.",
    )(func)
    func = click.option(
        "--interest",
        "-i",
        "interest",
        default="0",
        callback=amount_option,
        help="Interest currently due",
    )(func)
    func = click.option(
        "--principal",
        "-p",
        "principal",
        required=True,
        callback=amount_option,
        help="Outstanding principal (accepts 5,500.00 or 5.5k)",
    )(func)
    return func


def _run(ctx: click.Context, mode: str, request: ModeRequest) -> None:
    settings: EngineSettings = ctx.obj["settings"]
    trace = click.echo if ctx.obj["verbose"] else None
    result = run_mode(mode, request, settings, trace)
    if not result:
        raise click.ClickException(result.error)
    click.echo(result.value)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show each step of the calculation")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Loan payoff calculator: interest, payment series and payoff payments."""
    try:
        settings = EngineSettings.from_env()
    except (PayoffCalcError, ValueError) as exc:
        raise click.ClickException(f"Invalid calculator settings: {exc}")
    ctx.obj = {"settings": settings, "verbose": verbose}


@cli.command(name="help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Describe the available modes."""
    _run(ctx, "help", ModeRequest(Decimal(0), Decimal(0), date.today().month))


@cli.command()
@balance_options
@click.option("--months", "-n", "months", required=True, callback=months_option, help="Months to pay off the loan in")
@click.pass_context
def minpay(ctx: click.Context, principal: Decimal, interest: Decimal, month: int, months: int) -> None:
    """Find the minimum monthly payment that pays off the loan in time."""
    _run(ctx, "minpay", ModeRequest(principal, interest, month, months=months))


@cli.command()
@balance_options
@click.option("--payment", "-a", "payment", required=True, callback=amount_option, help="Payment to make each month")
@click.option("--months", "-n", "months", required=True, callback=months_option, help="Number of months to make the payment")
@click.option(
    "--stop-on-payoff/--run-all",
    "stop_on_payoff",
    default=True,
    help="Stop listing months once the loan is paid off (default) or list every month.",
)
@click.pass_context
def payseries(
    ctx: click.Context,
    principal: Decimal,
    interest: Decimal,
    month: int,
    payment: Decimal,
    months: int,
    stop_on_payoff: bool,
) -> None:
    """Show the balance after each month of a fixed payment."""
    _run(
        ctx,
        "payseries",
        ModeRequest(principal, interest, month, payment=payment, months=months, stop_on_payoff=stop_on_payoff),
    )


@cli.command()
@balance_options
@click.pass_context
def nextbal(ctx: click.Context, principal: Decimal, interest: Decimal, month: int) -> None:
    """Show next month's balance if no payment is made."""
    _run(ctx, "nextbal", ModeRequest(principal, interest, month))


@cli.command()
@balance_options
@click.option("--payment", "-a", "payment", required=True, callback=amount_option, help="Payment to split in two")
@click.pass_context
def bipay(ctx: click.Context, principal: Decimal, interest: Decimal, month: int, payment: Decimal) -> None:
    """Pay half on the 15th and half on the following 5th."""
    _run(ctx, "bipay", ModeRequest(principal, interest, month, payment=payment))


@cli.command()
@balance_options
@click.option("--payment", "-a", "payment", required=True, callback=amount_option, help="Payment to compare")
@click.pass_context
def compare(ctx: click.Context, principal: Decimal, interest: Decimal, month: int, payment: Decimal) -> None:
    """Compare paying bimonthly in halves against paying once a month."""
    _run(ctx, "compare", ModeRequest(principal, interest, month, payment=payment))


# Extra inputs each mode asks for in the interactive session, in prompt order.
MODE_PROMPTS: Dict[str, List[Tuple[str, str, Callable[[str], Any]]]] = {
    "minpay": [("months", "Enter months to pay off loan in", prompt_month_count)],
    "payseries": [
        ("payment", "Enter payment amount to make each month", prompt_amount),
        ("months", "Enter number of months to make this payment", prompt_month_count),
    ],
    "bipay": [("payment", "Enter payment to be split into two bi-monthly payments", prompt_amount)],
    "compare": [("payment", "Enter payment amount for comparison", prompt_amount)],
}


@cli.command()
@click.option(
    "--month",
    "-m",
    "month",
    default=lambda: date.today().month,
    callback=month_option,
    help="Month number (1-12) of the next payment. Defaults to the current month.",
)
@click.pass_context
def interactive(ctx: click.Context, month: int) -> None:
    """Prompt for the balance, the mode and its inputs.

    Malformed numbers are asked for again. An unknown mode starts the session
    over from the principal prompt.
    """
    settings: EngineSettings = ctx.obj["settings"]
    while True:
        principal = click.prompt("Enter principal amount", value_proc=prompt_amount)
        interest = click.prompt("Enter interest amount", value_proc=prompt_amount)
        mode = click.prompt('Enter mode, or to see a list of available modes, type "help"')
        request = ModeRequest(principal, interest, month)
        for field_name, text, proc in MODE_PROMPTS.get(mode.strip().lower(), []):
            setattr(request, field_name, click.prompt(text, value_proc=proc))
        result = run_mode(mode, request, settings, click.echo)
        if result:
            click.echo(result.value)
            return
        click.echo(result.error)


if __name__ == "__main__":
    cli()
