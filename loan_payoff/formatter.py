"""Output helpers for the loan payoff calculator.

This module renders money amounts and snapshots as text. The CLI prints
through these helpers; the web templates only use :func:`format_money`.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .data_models import Snapshot

CURRENCY_OPTIONS: Dict[str, Dict[str, str]] = {
    "USD": {"label": "US dollar", "prefix": "$", "suffix": ""},
    "EUR": {"label": "Euro", "prefix": "€", "suffix": ""},
    "GBP": {"label": "British pound", "prefix": "£", "suffix": ""},
    "PLN": {"label": "Polish złoty", "prefix": "", "suffix": " zł"},
}


def normalized_currency(code: str) -> str:
    code = (code or "").upper()
    return code if code in CURRENCY_OPTIONS else "USD"


def format_money(value: float, currency: str = "USD") -> str:
    """Format ``value`` with thousands separators and the currency sign."""
    meta = CURRENCY_OPTIONS[normalized_currency(currency)]
    sign = "-" if value < 0 else ""
    return f"{sign}{meta['prefix']}{abs(value):,.2f}{meta['suffix']}"


def snapshot_row(snapshot: Snapshot, currency: str = "USD") -> List[str]:
    """Return the display cells of one snapshot table row."""
    return [
        format_money(snapshot.amount, currency),
        f"{snapshot.apr:.2f}%",
        format_money(snapshot.payment, currency),
        f"{snapshot.payment_interval_days} days",
        format_money(snapshot.interest, currency),
        snapshot.human_duration,
    ]


SNAPSHOT_HEADERS = ["Amount", "APR", "Payment", "Every", "Interest", "Time"]


def print_snapshot(snapshot: Snapshot, currency: str = "USD") -> None:
    """Print the outcome of one simulation."""
    print("Result")
    print("-" * 48)
    print(f"Amount         : {format_money(snapshot.amount, currency)}")
    print(f"APR            : {snapshot.apr:.2f}%")
    print(f"Payment        : {format_money(snapshot.payment, currency)} every {snapshot.payment_interval_days} days")
    print(f"Total time     : {snapshot.human_duration}")
    print(f"Interest paid  : {format_money(snapshot.interest, currency)}")
    print("-" * 48)


def print_unpayable() -> None:
    print("Invalid payment!")
    print("i.e. you'd never pay it off...")


def print_snapshots(snapshots: Iterable[Snapshot], currency: str = "USD") -> None:
    """Print snapshots as an aligned table, or a hint when there are none."""
    rows = [snapshot_row(s, currency) for s in snapshots]
    if not rows:
        print("Take a snapshot to view multiple payment plans")
        return
    widths = [len(h) for h in SNAPSHOT_HEADERS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    print("  ".join(h.ljust(w) for h, w in zip(SNAPSHOT_HEADERS, widths)))
    print("  ".join("-" * w for w in widths))
    for row in rows:
        print("  ".join(cell.rjust(w) for cell, w in zip(row, widths)))
