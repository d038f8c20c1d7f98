"""Allocation engine: income + category -> recommended amount.

Most categories use the default percentage rule. A few ids map to a
specialized formula through a registry, so new formulas can be added
without touching the dispatch code::

    engine = AllocationEngine()

    @engine.formula('vacation_savings')
    def vacation(category, monthly_income):
        return monthly_income * category.allocation_percentage * 12

The engine never raises for bad numbers: negative income counts as zero,
missing assumptions use the formula defaults, and undefined math yields 0.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Mapping, Optional

from . import formulas
from .assumptions import resolve
from .catalog import CategoryCatalog
from .models import AmountDisplayType, BudgetCategory

logger = logging.getLogger(__name__)

Formula = Callable[[BudgetCategory, float], float]


def default_amount(category: BudgetCategory, monthly_income: float) -> float:
    """Percentage-of-income rule; TOTAL categories report a year's worth."""
    monthly = monthly_income * category.allocation_percentage
    if category.display_type == AmountDisplayType.TOTAL:
        return monthly * 12
    return monthly


def home_affordability(category: BudgetCategory, monthly_income: float) -> float:
    defaults = formulas.HOME_DEFAULTS
    return formulas.home_price(
        monthly_income * category.allocation_percentage,
        down_payment_pct=resolve(category, 'Down Payment', defaults),
        interest_rate_pct=resolve(category, 'Interest Rate', defaults),
        property_tax_pct=resolve(category, 'Property Tax Rate', defaults),
        loan_term_years=resolve(category, 'Loan Term', defaults),
    )


def car_affordability(category: BudgetCategory, monthly_income: float) -> float:
    defaults = formulas.CAR_DEFAULTS
    return formulas.car_price(
        monthly_income * category.allocation_percentage,
        down_payment_pct=resolve(category, 'Down Payment', defaults),
        interest_rate_pct=resolve(category, 'Interest Rate', defaults),
        loan_term_years=resolve(category, 'Loan Term', defaults),
    )


def emergency_fund_size(category: BudgetCategory, monthly_income: float) -> float:
    return formulas.emergency_fund(
        monthly_income,
        resolve(category, 'Months of Salary', formulas.EMERGENCY_DEFAULTS),
    )


DEFAULT_FORMULAS: Dict[str, Formula] = {
    'home': home_affordability,
    'house': home_affordability,
    'car': car_affordability,
    'emergency_savings': emergency_fund_size,
}


class AllocationEngine:
    """Computes recommended amounts for categories."""

    def __init__(self, registry: Optional[Mapping[str, Formula]] = None) -> None:
        self._formulas: Dict[str, Formula] = dict(DEFAULT_FORMULAS if registry is None else registry)

    def register(self, category_id: str, formula: Formula) -> None:
        self._formulas[category_id] = formula

    def formula(self, category_id: str) -> Callable[[Formula], Formula]:
        """Decorator form of :meth:`register`."""
        def decorator(func: Formula) -> Formula:
            self.register(category_id, func)
            return func
        return decorator

    def formula_for(self, category_id: str) -> Formula:
        return self._formulas.get(category_id, default_amount)

    def recommended_amount(self, category: BudgetCategory, monthly_income: float) -> float:
        income = _sanitize_income(monthly_income)
        amount = self.formula_for(category.id)(category, income)
        if not math.isfinite(amount) or amount < 0:
            logger.debug("Formula for '%s' returned %s; using 0", category.id, amount)
            return 0.0
        return amount

    def recompute(self, catalog: CategoryCatalog, monthly_income: float) -> None:
        """Refresh ``recommended_amount`` on every category in ``catalog``."""
        income = _sanitize_income(monthly_income)
        for category in catalog:
            catalog.set_recommended_amount(category.id, self.recommended_amount(category, income))


def _sanitize_income(monthly_income: float) -> float:
    try:
        income = float(monthly_income)
    except (TypeError, ValueError):
        logger.debug("Non-numeric income %r treated as 0", monthly_income)
        return 0.0
    if not math.isfinite(income) or income < 0:
        return 0.0
    return income
