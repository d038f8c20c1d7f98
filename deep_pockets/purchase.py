"""Quick "can I afford this?" check against a category's allocation."""

from __future__ import annotations

from dataclasses import dataclass

from .formatting import format_currency
from .models import AmountDisplayType, BudgetCategory


@dataclass(frozen=True)
class PurchaseAnalysis:
    can_afford: bool
    summary: str
    recommended_amount: float
    recommended_monthly: float
    monthly_amount: float


def check_purchase(
    category: BudgetCategory,
    amount: float,
    monthly_income: float,
    timeframe: AmountDisplayType = AmountDisplayType.MONTHLY,
) -> PurchaseAnalysis:
    """Compare a cost with what the category allows.

    ``timeframe`` says whether ``amount`` is a monthly cost or a yearly
    total; the allowance is scaled the same way before comparing.
    """
    recommended_monthly = max(0.0, monthly_income) * category.allocation_percentage
    if timeframe == AmountDisplayType.TOTAL:
        monthly_amount = amount / 12
        recommended_amount = recommended_monthly * 12
    else:
        monthly_amount = amount
        recommended_amount = recommended_monthly

    can_afford = amount <= recommended_amount
    difference = format_currency(abs(recommended_amount - amount))
    summary = (
        f"You're under budget by {difference}" if can_afford
        else f"You're over budget by {difference}"
    )
    return PurchaseAnalysis(
        can_afford=can_afford,
        summary=summary,
        recommended_amount=recommended_amount,
        recommended_monthly=recommended_monthly,
        monthly_amount=monthly_amount,
    )
