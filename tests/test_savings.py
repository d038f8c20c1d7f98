from datetime import date, datetime

import pytest

from deep_pockets.catalog import load_default_catalog
from deep_pockets.models import AmountDisplayType, BudgetCategory, CategoryType
from deep_pockets.savings import SavingsPlanner, months_until

TODAY = date(2024, 1, 15)


def _savings_category(pct: float = 0.05) -> BudgetCategory:
    return BudgetCategory(
        'vacation_savings', 'Vacation Savings', '🏖️', '', pct,
        AmountDisplayType.MONTHLY, type=CategoryType.SAVINGS,
    )


def test_months_until_counts_whole_months():
    assert months_until(date(2025, 1, 15), TODAY) == 12
    assert months_until(date(2024, 3, 14), TODAY) == 1
    assert months_until(date(2024, 3, 15), TODAY) == 2


def test_months_until_minimum_is_one():
    assert months_until(TODAY, TODAY) == 1
    assert months_until(date(2023, 6, 1), TODAY) == 1


def test_months_until_accepts_datetimes():
    assert months_until(datetime(2024, 7, 15, 9, 30), datetime(2024, 1, 15, 18, 0)) == 6


def test_infeasible_goal():
    result = SavingsPlanner(today=TODAY).analyze(_savings_category(), 12_000, date(2025, 1, 15), 4000)
    assert result.months_to_goal == 12
    assert result.required_monthly_savings == pytest.approx(1000.0)
    assert result.recommended_monthly_savings == pytest.approx(200.0)
    assert result.can_save is False
    assert len(result.recommendations) == 4
    assert '$1,000' in result.summary
    assert 'exceeds' in result.summary


def test_feasible_goal():
    result = SavingsPlanner(today=TODAY).analyze(_savings_category(), 1200, date(2025, 1, 15), 4000)
    assert result.can_save is True
    assert result.required_monthly_savings == pytest.approx(100.0)
    assert len(result.recommendations) == 3
    assert result.recommendations[0] == 'Set up automatic monthly transfers of $100'
    assert result.summary == 'You can reach your goal by saving $100 monthly'


def test_target_today_is_one_month():
    result = SavingsPlanner(today=TODAY).analyze(_savings_category(), 500, TODAY, 4000)
    assert result.months_to_goal == 1
    assert result.required_monthly_savings == pytest.approx(500.0)


def test_non_positive_target_rejected():
    planner = SavingsPlanner(today=TODAY)
    with pytest.raises(ValueError):
        planner.analyze(_savings_category(), 0, date(2025, 1, 15), 4000)
    with pytest.raises(ValueError):
        planner.analyze(_savings_category(), -10, date(2025, 1, 15), 4000)


def test_analyze_goal_uses_category_goal():
    catalog = load_default_catalog()
    planner = SavingsPlanner(today=date(2024, 1, 1))
    result = planner.analyze_goal(catalog.get('house_downpayment'), 10_000)
    assert result.months_to_goal == 60
    assert result.required_monthly_savings == pytest.approx(1000.0)
    assert result.recommended_monthly_savings == pytest.approx(500.0)
    assert result.can_save is False


def test_analyze_goal_without_goal():
    catalog = load_default_catalog()
    assert SavingsPlanner(today=TODAY).analyze_goal(catalog.get('groceries'), 5000) is None
