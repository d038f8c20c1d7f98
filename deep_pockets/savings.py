"""Savings planner: can a category's allocation reach a goal by a date?"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union

from dateutil.relativedelta import relativedelta

from .formatting import format_currency
from .models import BudgetCategory

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class SavingsAnalysis:
    can_save: bool
    summary: str
    required_monthly_savings: float
    recommended_monthly_savings: float
    months_to_goal: int
    recommendations: List[str] = field(default_factory=list)


def months_until(target_date: DateLike, today: Optional[DateLike] = None) -> int:
    """Whole calendar months from ``today`` to ``target_date``, at least 1.

    Partial months are dropped, so Jan 15 -> Mar 14 counts as one month.
    Dates on or before ``today`` also count as one month.
    """
    start = _as_date(today or date.today())
    end = _as_date(target_date)
    delta = relativedelta(end, start)
    return max(1, delta.years * 12 + delta.months)


class SavingsPlanner:
    """Answers "can I save for this?" for one category."""

    def __init__(self, today: Optional[DateLike] = None) -> None:
        self.today = today

    def analyze(
        self,
        category: BudgetCategory,
        target_amount: float,
        target_date: DateLike,
        monthly_income: float,
    ) -> SavingsAnalysis:
        """Compare the monthly savings a goal needs with the category's allocation.

        Raises:
            ValueError: If ``target_amount`` is not positive
        """
        if target_amount <= 0:
            raise ValueError(f"Savings target must be positive, got {target_amount}")

        months = months_until(target_date, self.today)
        required = target_amount / months
        recommended = max(0.0, monthly_income) * category.allocation_percentage
        can_save = required <= recommended
        logger.debug(
            "Savings goal %s over %d months for '%s': need %.2f, allocation %.2f",
            target_amount, months, category.id, required, recommended,
        )

        if can_save:
            summary = f"You can reach your goal by saving {format_currency(required)} monthly"
            recommendations = [
                f"Set up automatic monthly transfers of {format_currency(required)}",
                "Consider a high-yield savings account for better returns",
                "Track your progress monthly and adjust if needed",
            ]
        else:
            summary = (
                f"You'd need to save {format_currency(required)} monthly, "
                "which exceeds your recommended limit"
            )
            recommendations = [
                "Consider extending your timeline to reduce monthly requirements",
                "Look for areas in your budget to increase savings",
                "Break down your goal into smaller milestones",
                "Explore ways to increase your income",
            ]

        return SavingsAnalysis(
            can_save=can_save,
            summary=summary,
            required_monthly_savings=required,
            recommended_monthly_savings=recommended,
            months_to_goal=months,
            recommendations=recommendations,
        )

    def analyze_goal(self, category: BudgetCategory, monthly_income: float) -> Optional[SavingsAnalysis]:
        """Analyze a category's own ``savings_goal``/``savings_timeline``, if it has one."""
        if not category.savings_goal or not category.savings_timeline:
            return None
        start = _as_date(self.today or date.today())
        target = start + relativedelta(months=category.savings_timeline)
        return self.analyze(category, category.savings_goal, target, monthly_income)


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value
