"""Command‑line interface for the loan payoff calculator.

This module uses the ``click`` library to implement a multi‑command interface.
Users can simulate a single payment plan, check whether a plan ever pays the
loan off, or compare several plans in one table. Results can be printed to
the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import shlex
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import click

from .config import configure_logging, load_settings
from .engine import Loan, SimulationDidNotConverge, UnpayableSchedule
from .formatter import normalized_currency, print_snapshot, print_snapshots, print_unpayable
from .history import SnapshotHistory
from .data_models import Snapshot
from .utils import float_from_str


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain floats ("43524.71"), thousands separators ("43,524.71") and
    shorthand with ``k``/``m`` suffixes (e.g. "250k" meaning 250_000).
    """
    value = str(value).strip().lower()
    factor = 1.0
    if value.endswith("k"):
        factor = 1_000.0
        value = value[:-1]
    elif value.endswith("m"):
        factor = 1_000_000.0
        value = value[:-1]
    try:
        amount = float_from_str(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")
    if amount < 0:
        raise click.BadParameter(f"Amount must not be negative: {value}")
    return amount


def parse_apr(value: str) -> float:
    """Parse an annual rate in percent, with or without a trailing ``%``."""
    value = str(value).strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        return float_from_str(value)
    except ValueError:
        raise click.BadParameter(f"Invalid APR: {value}")


def build_loan_from_options(
    amount: str,
    apr: str,
    compounding: str,
    payment: str,
    every: int,
) -> Loan:
    return Loan.create(
        amount=parse_amount(amount),
        apr=parse_apr(apr),
        compounding=compounding,
        payment=parse_amount(payment),
        payday_interval=every,
    )


def export_to_json(path: Path, snapshots: List[Snapshot]) -> None:
    """Export snapshots to a JSON file."""
    data = {"snapshots": [s.to_dict() for s in snapshots]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, snapshots: List[Snapshot]) -> None:
    """Export snapshots to a CSV file."""
    header = [
        "Amount",
        "APR",
        "Payment",
        "Payment_Interval_Days",
        "Days",
        "Duration",
        "Interest",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for s in snapshots:
            writer.writerow(
                [
                    s.amount,
                    s.apr,
                    s.payment,
                    s.payment_interval_days,
                    s.days,
                    s.human_duration,
                    s.interest,
                ]
            )


def export_snapshots(output: str, snapshots: List[Snapshot]) -> None:
    path = Path(output)
    if path.suffix.lower() == ".json":
        export_to_json(path, snapshots)
    elif path.suffix.lower() == ".csv":
        export_to_csv(path, snapshots)
    else:
        raise click.BadParameter("Unsupported output format; use .json or .csv")
    click.echo(f"Results exported to {path}")


def loan_options(func: Callable) -> Callable:
    """Attach the options describing one loan to a command."""
    options = [
        click.option("--amount", "-a", "amount", required=True, help="Amount owed"),
        click.option("--apr", "-r", "apr", required=True, help="Annual interest rate (percent)"),
        click.option(
            "--compounding",
            "-c",
            "compounding",
            default="daily",
            show_default=True,
            help="Compounding: daily, monthly or yearly (anything else means daily)",
        ),
        click.option("--payment", "-p", "payment", required=True, help="Amount paid every interval"),
        click.option("--every", "-e", "every", type=int, default=30, show_default=True, help="Days between payments"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log the simulation at DEBUG level")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """A command‑line calculator for how long a loan takes to pay off."""
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@cli.command()
@loan_options
@click.option("--currency", "currency", default=None, help="Display currency (USD, EUR, GBP, PLN)")
@click.option(
    "--max-days", "max_days", type=click.IntRange(min=1), default=None, help="Give up after this many simulated days"
)
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def run(
    settings,
    amount: str,
    apr: str,
    compounding: str,
    payment: str,
    every: int,
    currency: Optional[str],
    max_days: Optional[int],
    output: Optional[str],
) -> None:
    """Simulate the loan until it is paid off and print the result."""
    loan = build_loan_from_options(amount, apr, compounding, payment, every)
    try:
        snapshot = loan.run_until_done(max_days=settings.max_days if max_days is None else max_days)
    except UnpayableSchedule:
        print_unpayable()
        sys.exit(1)
    except SimulationDidNotConverge as exc:
        click.echo(str(exc))
        sys.exit(1)
    if output:
        export_snapshots(output, [snapshot])
    else:
        print_snapshot(snapshot, normalized_currency(currency or settings.currency))


@cli.command()
@loan_options
@click.pass_obj
def check(settings, amount: str, apr: str, compounding: str, payment: str, every: int) -> None:
    """Check whether a payment ever pays the loan off."""
    if every > settings.max_days:
        raise click.BadParameter(f"Payment interval must be at most {settings.max_days} days")
    loan = build_loan_from_options(amount, apr, compounding, payment, every)
    if loan.is_valid_pay_schedule():
        click.echo("Payment schedule is valid.")
    else:
        print_unpayable()
        sys.exit(1)


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Turn a quoted scenario option string into loan option values."""
    tokens = shlex.split(opts)
    names = {
        "-a": "amount",
        "--amount": "amount",
        "-r": "apr",
        "--apr": "apr",
        "-c": "compounding",
        "--compounding": "compounding",
        "-p": "payment",
        "--payment": "payment",
        "-e": "every",
        "--every": "every",
    }
    params: Dict[str, Any] = {
        "amount": None,
        "apr": None,
        "compounding": "daily",
        "payment": None,
        "every": 30,
    }
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token not in names:
            raise click.BadParameter(f"Unknown option in scenario: {token}")
        if i + 1 >= len(tokens):
            raise click.BadParameter(f"Missing value for {token} in scenario")
        params[names[token]] = tokens[i + 1]
        i += 2
    for required in ("amount", "apr", "payment"):
        if params[required] is None:
            raise click.BadParameter(f"Scenario missing required option {required}")
    try:
        params["every"] = int(params["every"])
    except ValueError:
        raise click.BadParameter(f"Invalid payment interval: {params['every']}")
    return params


@cli.command()
@click.option("--scenario", "scenarios", multiple=True, required=True, help="Scenario options quoted string")
@click.option("--currency", "currency", default=None, help="Display currency (USD, EUR, GBP, PLN)")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def compare(settings, scenarios: Tuple[str, ...], currency: Optional[str], output: Optional[str]) -> None:
    """Compare several payment plans in one table.

    Scenarios are provided as quoted option strings, for example:

        loan-payoff compare --scenario "-a 40k -r 7.5 -p 730.99" --scenario "-a 40k -r 7.5 -p 1000"
    """
    history = SnapshotHistory()
    failed: List[Tuple[str, str]] = []
    for opts in scenarios:
        loan = build_loan_from_options(**parse_scenario_opts(opts))
        try:
            history.add(loan.run_until_done(max_days=settings.max_days))
        except UnpayableSchedule:
            failed.append((opts, "never pays off"))
        except SimulationDidNotConverge as exc:
            failed.append((opts, str(exc)))
    if output:
        export_snapshots(output, list(history))
    else:
        print_snapshots(history, normalized_currency(currency or settings.currency))
    for opts, reason in failed:
        click.echo(f"Scenario '{opts}': {reason}")


if __name__ == "__main__":
    cli()
