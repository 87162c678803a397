"""Core calculation engine for the loan payoff calculator.

A ``Loan`` is simulated one day at a time: interest accrues according to the
compounding mode and a fixed payment is made every ``payday_interval`` days
until the balance is gone. Before simulating, the payment schedule is checked
so that a payment which never outpaces the interest is rejected instead of
looping forever. A finished run is returned as a ``Snapshot``.

Arithmetic is done with floats and the balance is rounded to cents once per
day. The results are estimates, not a bank-grade ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .data_models import Compounding, Snapshot
from .utils import DAYS_PER_MONTH, DAYS_PER_YEAR, round2

logger = logging.getLogger(__name__)

# Balances at or below this are treated as paid off.
PAID_OFF_EPSILON = 0.001


class SimulationError(ValueError):
    """Base class for loans that cannot be simulated to payoff."""


class UnpayableSchedule(SimulationError):
    """The payment never exceeds the interest accrued between two payments."""

    def __init__(self) -> None:
        super().__init__("Payment does not exceed the interest accrued between payments")


class SimulationDidNotConverge(SimulationError):
    """The loan was still outstanding after the allowed number of days."""

    def __init__(self, max_days: int) -> None:
        self.max_days = max_days
        super().__init__(f"Loan not paid off within {max_days} days")


@dataclass(frozen=True)
class Loan:
    """Parameters of a single payoff simulation.

    ``apr`` is the annual rate in percent as entered by the user and ``rate``
    the matching decimal (``7.5`` and ``0.075``). ``compounding`` accepts a
    label and unknown labels mean daily. ``payday_interval`` is clamped to at
    least one day.
    """

    amount: float
    apr: float
    compounding: Compounding
    payment: float
    payday_interval: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "compounding", Compounding.from_label(self.compounding))
        object.__setattr__(self, "payday_interval", max(1, int(self.payday_interval)))

    @classmethod
    def create(
        cls,
        amount: float,
        apr: float,
        compounding: Union[str, Compounding, None],
        payment: float,
        payday_interval: int,
    ) -> "Loan":
        return cls(
            amount=float(amount),
            apr=float(apr),
            compounding=compounding,
            payment=float(payment),
            payday_interval=payday_interval,
        )

    @property
    def rate(self) -> float:
        return self.apr / 100

    def _accrue(self, balance: float, day: int) -> float:
        """Return ``balance`` with the interest due on ``day`` added."""
        if self.compounding is Compounding.DAILY:
            return balance + balance * (self.rate / DAYS_PER_YEAR)
        if self.compounding is Compounding.MONTHLY and day % DAYS_PER_MONTH == 0:
            return balance + balance * (self.rate / 12)
        if self.compounding is Compounding.YEARLY and day % DAYS_PER_YEAR == 0:
            return balance + balance * self.rate
        return balance

    def is_valid_pay_schedule(self) -> bool:
        """Return True if one payment beats the interest of one interval.

        Days are counted from 1 so that yearly and monthly compounding do not
        fire on a day zero.
        """
        balance = self.amount
        for day in range(1, self.payday_interval + 1):
            balance = self._accrue(balance, day)
        interest_accrued = balance - self.amount
        return self.payment > interest_accrued

    def run_until_done(self, max_days: Optional[int] = None) -> Snapshot:
        """Simulate the loan until it is paid off.

        Raises
        ------
        UnpayableSchedule
            If :meth:`is_valid_pay_schedule` is False. No simulation is run.
        SimulationDidNotConverge
            If ``max_days`` is given and the balance is still outstanding on
            that day, or if the first payment falls after ``max_days``.
        """
        if max_days is not None and self.payday_interval > max_days:
            # No payment lands inside the allowed window.
            raise SimulationDidNotConverge(max_days)
        if not self.is_valid_pay_schedule():
            raise UnpayableSchedule()

        logger.debug(
            "Simulating loan: amount=%s rate=%s compounding=%s payment=%s every %s days",
            self.amount,
            self.rate,
            self.compounding.value,
            self.payment,
            self.payday_interval,
        )

        day = 0
        balance = self.amount
        total_paid = 0.0
        while balance > PAID_OFF_EPSILON:
            if max_days is not None and day >= max_days:
                raise SimulationDidNotConverge(max_days)
            day += 1
            balance = round2(self._accrue(balance, day))
            if day % self.payday_interval == 0:
                if self.payment >= balance:
                    total_paid += balance
                    balance = 0.0
                else:
                    total_paid += self.payment
                    balance -= self.payment

        snapshot = Snapshot.from_run(
            amount=self.amount,
            apr=self.apr,
            payment=self.payment,
            payment_interval_days=self.payday_interval,
            interest=total_paid - self.amount,
            days=day,
        )
        logger.debug("Paid off after %d days, interest %.2f", day, snapshot.interest)
        return snapshot
