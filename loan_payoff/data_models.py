"""Data models for the loan payoff calculator.

This module defines the compounding mode enumeration and the ``Snapshot``
dataclass holding the outcome of one finished payoff simulation. Snapshots are
immutable: they are created once per successful run and then only collected,
displayed or exported.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from .utils import days_to_human_duration, round2


class Compounding(Enum):
    """How often accrued interest is added to the balance."""

    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def from_label(cls, label: Optional[Union[str, "Compounding"]]) -> "Compounding":
        """Return the mode named by ``label``.

        Matching ignores case and surrounding whitespace. Any unrecognized
        label, including ``None``, falls back to ``DAILY`` instead of raising.
        """
        if isinstance(label, cls):
            return label
        if label is None:
            return cls.DAILY
        try:
            return cls(str(label).strip().lower())
        except ValueError:
            return cls.DAILY


@dataclass(frozen=True)
class Snapshot:
    """The result of a loan simulation that was paid off.

    Attributes
    ----------
    amount: float
        The original principal.
    apr: float
        The annual rate as entered, in percent (``7.5`` means 7.5 %).
    payment: float
        The amount paid every interval.
    payment_interval_days: int
        Days between payments.
    days: int
        Days elapsed until the balance reached zero.
    human_duration: str
        ``days`` formatted as years, months and days.
    interest: float
        Total interest paid, rounded to cents.
    """

    amount: float
    apr: float
    payment: float
    payment_interval_days: int
    days: int
    human_duration: str
    interest: float

    @classmethod
    def from_run(
        cls,
        amount: float,
        apr: float,
        payment: float,
        payment_interval_days: int,
        interest: float,
        days: int,
    ) -> "Snapshot":
        return cls(
            amount=amount,
            apr=apr,
            payment=payment,
            payment_interval_days=payment_interval_days,
            days=days,
            human_duration=days_to_human_duration(days),
            interest=round2(interest),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        """Rebuild a snapshot from :meth:`to_dict` output.

        The duration string and rounding are recomputed from the raw values,
        so a tampered ``human_duration`` is ignored. Raises ``KeyError`` or
        ``ValueError`` on missing or malformed fields.
        """
        return cls.from_run(
            amount=float(data["amount"]),
            apr=float(data["apr"]),
            payment=float(data["payment"]),
            payment_interval_days=int(data["payment_interval_days"]),
            interest=float(data["interest"]),
            days=int(data["days"]),
        )
