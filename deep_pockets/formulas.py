"""Affordability formulas for large purchases and savings targets.

All rates are annual percentages (``7.0`` means 7 %) and terms are years,
matching how assumptions are entered. Every solver degrades to ``0.0``
instead of raising when the math is undefined (zero term, 100 % down
payment, non-positive divisor), so callers always get a displayable number.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# Fallback values used when a category lacks an assumption or the user's
# edit did not parse. Keyed by assumption title.
HOME_DEFAULTS = {
    'Down Payment': 20.0,
    'Interest Rate': 7.0,
    'Property Tax Rate': 1.1,
    'Loan Term': 30.0,
}
CAR_DEFAULTS = {
    'Down Payment': 20.0,
    'Interest Rate': 5.0,
    'Loan Term': 5.0,
}
EMERGENCY_DEFAULTS = {
    'Months of Salary': 6.0,
}

SCHEDULE_COLUMNS = ['Month', 'Payment', 'Interest', 'Principal', 'Balance']


def monthly_rate(annual_rate_pct: float) -> float:
    return (annual_rate_pct / 100.0) / 12.0


def amortization_factor(annual_rate_pct: float, years: float) -> float:
    """Level-payment coefficient ``r(1+r)^n / ((1+r)^n - 1)``.

    Multiplying a principal by this factor gives the monthly payment that
    retires it in ``years``. Falls back to ``1/n`` at a zero rate and to
    ``0.0`` when the term is not positive.
    """
    n = years * 12.0
    if n <= 0:
        return 0.0
    r = monthly_rate(annual_rate_pct)
    if r == 0:
        return 1.0 / n
    growth = (1.0 + r) ** n
    return r * growth / (growth - 1.0)


def monthly_payment(principal: float, annual_rate_pct: float, years: float) -> float:
    """Fully amortizing monthly payment for a loan of ``principal``."""
    return max(0.0, principal) * amortization_factor(annual_rate_pct, years)


def principal_from_payment(payment: float, annual_rate_pct: float, years: float) -> float:
    """Largest loan that ``payment`` per month retires over ``years``."""
    factor = amortization_factor(annual_rate_pct, years)
    if factor <= 0:
        return 0.0
    return max(0.0, payment) / factor


def home_price(
    monthly_budget: float,
    down_payment_pct: float = HOME_DEFAULTS['Down Payment'],
    interest_rate_pct: float = HOME_DEFAULTS['Interest Rate'],
    property_tax_pct: float = HOME_DEFAULTS['Property Tax Rate'],
    loan_term_years: float = HOME_DEFAULTS['Loan Term'],
) -> float:
    """Maximum home price whose mortgage payment plus property tax fits the budget.

    Solves ``budget = price * (1 - dp) * factor + price * tax / 12`` for
    ``price``.
    """
    if loan_term_years * 12 <= 0:
        logger.debug("Home price undefined for loan term %s", loan_term_years)
        return 0.0
    factor = amortization_factor(interest_rate_pct, loan_term_years)
    dp_fraction = 1.0 - down_payment_pct / 100.0
    monthly_tax_fraction = (property_tax_pct / 100.0) / 12.0
    divisor = dp_fraction * factor + monthly_tax_fraction
    if divisor <= 0:
        logger.debug("Home price divisor %s is not positive", divisor)
        return 0.0
    return max(0.0, monthly_budget) / divisor


def home_monthly_payment(
    price: float,
    down_payment_pct: float = HOME_DEFAULTS['Down Payment'],
    interest_rate_pct: float = HOME_DEFAULTS['Interest Rate'],
    property_tax_pct: float = HOME_DEFAULTS['Property Tax Rate'],
    loan_term_years: float = HOME_DEFAULTS['Loan Term'],
) -> float:
    """Monthly mortgage plus property tax implied by ``price`` (inverse of :func:`home_price`)."""
    loan = max(0.0, price) * (1.0 - down_payment_pct / 100.0)
    tax = max(0.0, price) * (property_tax_pct / 100.0) / 12.0
    return monthly_payment(loan, interest_rate_pct, loan_term_years) + tax


def car_price(
    monthly_budget: float,
    down_payment_pct: float = CAR_DEFAULTS['Down Payment'],
    interest_rate_pct: float = CAR_DEFAULTS['Interest Rate'],
    loan_term_years: float = CAR_DEFAULTS['Loan Term'],
) -> float:
    """Maximum car price whose loan payment fits the monthly budget."""
    dp_fraction = 1.0 - down_payment_pct / 100.0
    if dp_fraction <= 0 or loan_term_years * 12 <= 0:
        logger.debug(
            "Car price undefined for down payment %s%% over %s years",
            down_payment_pct,
            loan_term_years,
        )
        return 0.0
    factor = amortization_factor(interest_rate_pct, loan_term_years)
    return max(0.0, monthly_budget) / (factor * dp_fraction)


def emergency_fund(
    monthly_income: float,
    months_of_salary: float = EMERGENCY_DEFAULTS['Months of Salary'],
) -> float:
    """Emergency fund target as a whole number of months of income."""
    return max(0.0, monthly_income) * max(0.0, months_of_salary)


def amortization_schedule(principal: float, annual_rate_pct: float, years: float) -> pd.DataFrame:
    """Month-by-month breakdown of a level-payment loan.

    Returns:
        DataFrame with columns Month, Payment, Interest, Principal, Balance.
        Empty when the principal or term is not positive.
    """
    n = int(round(years * 12))
    if n <= 0 or principal <= 0:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    payment = monthly_payment(principal, annual_rate_pct, n / 12.0)
    r = monthly_rate(annual_rate_pct)
    months = np.arange(1, n + 1)

    if r == 0:
        balance = principal - payment * months
    else:
        growth = (1.0 + r) ** months
        balance = principal * growth - payment * (growth - 1.0) / r
    balance = np.clip(balance, 0.0, None)
    opening = np.concatenate(([principal], balance[:-1]))
    interest = opening * r

    return pd.DataFrame({
        'Month': months,
        'Payment': np.full(n, payment),
        'Interest': interest,
        'Principal': opening - balance,
        'Balance': balance,
    })
