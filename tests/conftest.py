"""Shared fixtures: the worked example loans used across the tests."""

import pytest

from loan_payoff.engine import Loan


@pytest.fixture
def car_loan() -> Loan:
    """$43,524.71 at 7.5 % compounded daily, $730.99 every 30 days."""
    return Loan.create(43524.71, 7.50, "daily", 730.99, 30)


@pytest.fixture
def yearly_loan() -> Loan:
    """$1,000 at 12 % compounded yearly, paid off by one $2,000 payment."""
    return Loan.create(1000, 12, "yearly", 2000, 30)


@pytest.fixture
def runaway_loan() -> Loan:
    """1200 % APR compounded daily against a $1 daily payment."""
    return Loan.create(1000, 1200, "daily", 1, 1)
