import pytest

from deep_pockets.budget import Budget
from deep_pockets.catalog import CategoryCatalog
from deep_pockets.improvements import ChangeKind, apply_improvements, projected_surplus, suggest_improvements
from deep_pockets.models import AmountDisplayType, BudgetCategory, CategoryType


def _category(cid, pct, ctype, priority):
    return BudgetCategory(cid, cid.replace('_', ' ').title(), '', '', pct, AmountDisplayType.MONTHLY,
                          type=ctype, priority=priority)


def _sample_catalog():
    return CategoryCatalog([
        _category('rent', 0.30, CategoryType.HOUSING, 1),
        _category('groceries', 0.10, CategoryType.FOOD, 1),
        _category('utilities', 0.05, CategoryType.UTILITIES, 2),
        _category('emergency_savings', 0.10, CategoryType.SAVINGS, 1),
        _category('retirement_savings', 0.10, CategoryType.SAVINGS, 1),
        _category('dining', 0.05, CategoryType.FOOD, 3),
        _category('hobbies', 0.01, CategoryType.ENTERTAINMENT, 4),
    ])


def _budget(catalog, income, amounts):
    budget = Budget(income)
    for cid, amount in amounts.items():
        budget.set_category(catalog.get(cid), amount)
    return budget


def test_suggests_missing_categories():
    catalog = _sample_catalog()
    budget = _budget(catalog, 4000, {'rent': 1200})
    suggestions = suggest_improvements(budget, catalog)
    assert [s.category.id for s in suggestions] == [
        'groceries', 'utilities', 'emergency_savings', 'retirement_savings', 'dining',
    ]
    assert all(s.kind == ChangeKind.ADD for s in suggestions)
    assert suggestions[0].new_amount == pytest.approx(400.0)
    assert suggestions[0].current_amount is None
    assert projected_surplus(budget, suggestions) == pytest.approx(1200.0)

    apply_improvements(budget, suggestions)
    assert len(budget) == 6
    assert budget.unused_amount == pytest.approx(1200.0)


def test_flags_underfunded_essentials():
    catalog = _sample_catalog()
    budget = _budget(catalog, 4000, {'rent': 1200, 'groceries': 200})
    budget.update_spent_amount('groceries', 150)
    increases = [s for s in suggest_improvements(budget, catalog) if s.kind == ChangeKind.INCREASE]
    assert [s.category.id for s in increases] == ['groceries']
    assert increases[0].current_amount == pytest.approx(200.0)
    assert increases[0].new_amount == pytest.approx(400.0)

    apply_improvements(budget, increases)
    assert budget.get_amount(catalog.get('groceries')) == pytest.approx(400.0)
    assert budget.line('groceries').spent == 150


def test_deficit_trims_overfunded_and_tiny_lines():
    catalog = _sample_catalog()
    budget = _budget(catalog, 2000, {
        'rent': 600, 'groceries': 200, 'emergency_savings': 200, 'retirement_savings': 200,
        'utilities': 100, 'dining': 900, 'hobbies': 10,
    })
    assert budget.unused_amount == pytest.approx(-210.0)
    suggestions = suggest_improvements(budget, catalog)
    assert [(s.kind, s.category.id) for s in suggestions] == [
        (ChangeKind.DECREASE, 'dining'),
        (ChangeKind.REMOVE, 'hobbies'),
    ]
    assert suggestions[0].new_amount == pytest.approx(630.0)
    assert projected_surplus(budget, suggestions) == pytest.approx(70.0)

    apply_improvements(budget, suggestions)
    assert not budget.is_selected(catalog.get('hobbies'))
    assert budget.unused_amount == pytest.approx(70.0)


def test_inactive_lines_count_as_missing():
    catalog = _sample_catalog()
    budget = _budget(catalog, 4000, {'rent': 1200, 'groceries': 400})
    budget.toggle_category('groceries')
    ids = [s.category.id for s in suggest_improvements(budget, catalog)]
    assert 'groceries' in ids


def test_limit_keeps_essential_additions_first():
    catalog = _sample_catalog()
    budget = _budget(catalog, 4000, {'rent': 1200})
    suggestions = suggest_improvements(budget, catalog, limit=2)
    assert [s.category.id for s in suggestions] == ['groceries', 'emergency_savings']
