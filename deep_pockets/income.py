"""Pay-period conversions between paychecks and monthly income."""

from __future__ import annotations

from enum import Enum


class PayPeriod(str, Enum):
    WEEKLY = 'Weekly'
    BIWEEKLY = 'Bi-weekly'
    SEMIMONTHLY = 'Semi-monthly'
    MONTHLY = 'Monthly'
    YEARLY = 'Yearly'

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @property
    def multiplier(self) -> float:
        """Factor converting one paycheck into a monthly amount."""
        return self.periods_per_year / 12


_PERIODS_PER_YEAR = {
    PayPeriod.WEEKLY: 52,
    PayPeriod.BIWEEKLY: 26,
    PayPeriod.SEMIMONTHLY: 24,
    PayPeriod.MONTHLY: 12,
    PayPeriod.YEARLY: 1,
}


def monthly_income(paycheck: float, period: PayPeriod) -> float:
    """Monthly income for a paycheck received every ``period``.

    Example:
        >>> monthly_income(2000, PayPeriod.BIWEEKLY)
        4333.333333333333
    """
    return max(0.0, paycheck) * period.multiplier


def paycheck_amount(monthly: float, period: PayPeriod) -> float:
    """Inverse of :func:`monthly_income`."""
    return max(0.0, monthly) / period.multiplier
