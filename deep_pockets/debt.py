"""Debt payoff planner: can a debt be cleared by a target date?"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .formatting import format_currency
from .formulas import monthly_payment
from .models import BudgetCategory
from .savings import DateLike, months_until


@dataclass(frozen=True)
class DebtAnalysis:
    can_afford: bool
    summary: str
    required_monthly_payment: float
    recommended_monthly_payment: float
    total_interest: float
    months_to_payoff: int
    recommendations: List[str] = field(default_factory=list)


class DebtPlanner:
    """Answers "can I pay this off by then?" for one debt category."""

    def __init__(self, today: Optional[DateLike] = None) -> None:
        self.today = today

    def analyze(
        self,
        category: BudgetCategory,
        debt_amount: float,
        annual_rate_pct: float,
        target_date: DateLike,
        monthly_income: float,
    ) -> DebtAnalysis:
        """Level payment needed to clear ``debt_amount`` by ``target_date``.

        Raises:
            ValueError: If ``debt_amount`` is not positive or the rate is negative
        """
        if debt_amount <= 0:
            raise ValueError(f"Debt amount must be positive, got {debt_amount}")
        if annual_rate_pct < 0:
            raise ValueError(f"Interest rate cannot be negative, got {annual_rate_pct}")

        months = months_until(target_date, self.today)
        payment = monthly_payment(debt_amount, annual_rate_pct, months / 12.0)
        total_interest = payment * months - debt_amount
        recommended = max(0.0, monthly_income) * category.allocation_percentage
        can_afford = payment <= recommended

        if can_afford:
            summary = f"Your monthly payment of {format_currency(payment)} fits your budget"
            recommendations = [
                f"Set up automatic monthly payments of {format_currency(payment)}",
                "Consider making extra payments to reduce total interest",
                "Look for opportunities to refinance at a lower rate",
                "Put any windfalls toward the principal balance",
            ]
        else:
            summary = (
                f"The monthly payment of {format_currency(payment)} "
                "exceeds your recommended limit"
            )
            recommendations = [
                "Consider extending your timeline to lower monthly payments",
                "Look into debt consolidation options",
                "Try negotiating a lower interest rate",
                "Consider a balance transfer to a lower-rate card",
            ]

        return DebtAnalysis(
            can_afford=can_afford,
            summary=summary,
            required_monthly_payment=payment,
            recommended_monthly_payment=recommended,
            total_interest=total_interest,
            months_to_payoff=months,
            recommendations=recommendations,
        )
