"""Utility functions for the loan payoff calculator.

This module provides the rounding helper used for monetary values, the
conversion of a day count into a human readable duration and a helper for
parsing user supplied numbers. The calendar is deliberately approximate:
a year is 365 days and a month is 30 days.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30


def round2(value: float) -> float:
    """Round a monetary value to two decimal places.

    ``value * 100`` is rounded to the nearest integer with halves going away
    from zero (``ROUND_HALF_UP`` in :mod:`decimal` terms), then divided by
    100. Python's built-in :func:`round` rounds halves to even, which is not
    what we want for money. Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    cents = Decimal(value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return float(cents) / 100


def days_to_human_duration(days: int) -> str:
    """Return ``days`` as a string like ``"2 years 3 months 4 days"``.

    The years and months segments are omitted when zero; the days segment is
    always present, so ``0`` becomes ``"0 days"`` and ``365`` becomes
    ``"1 years 0 days"``. Unit labels are always plural.
    """
    days = max(0, int(days))
    years, days = divmod(days, DAYS_PER_YEAR)
    months, days = divmod(days, DAYS_PER_MONTH)
    parts = []
    if years > 0:
        parts.append(f"{years} years")
    if months > 0:
        parts.append(f"{months} months")
    parts.append(f"{days} days")
    return " ".join(parts)


def float_from_str(value: str) -> float:
    """Convert a numeric string into a ``float``.

    Commas and surrounding whitespace are stripped. Raises ``ValueError`` if
    conversion fails or the value is not finite.
    """
    try:
        cleaned = str(value).replace(",", "").strip()
        number = float(cleaned)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not math.isfinite(number):
        raise ValueError(f"Invalid numeric value: {value}")
    return number
