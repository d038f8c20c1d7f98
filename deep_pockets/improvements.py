"""Suggestions for tightening or rounding out an existing budget.

:func:`suggest_improvements` looks at a :class:`~deep_pockets.budget.Budget`
and its current surplus and proposes at most six changes: add missing
essential or savings categories, top up underfunded essentials, trim
overfunded extras when the budget is in deficit, drop tiny discretionary
lines, or add quality-of-life categories when there is plenty left over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set

from .budget import DISCRETIONARY, Budget, priority_tier
from .catalog import CategoryCatalog
from .models import AmountDisplayType, BudgetCategory

logger = logging.getLogger(__name__)

ESSENTIAL_IDS = ('rent', 'groceries', 'utilities', 'transportation', 'emergency_savings')
SAVINGS_IDS = ('emergency_savings', 'investments', 'retirement_savings')
LIFESTYLE_IDS = ('entertainment', 'dining', 'vacation_savings', 'personal_development')

UNDERFUNDED_RATIO = 0.8
OVERFUNDED_RATIO = 1.3
SMALL_LINE_RATIO = 0.02
LARGE_SURPLUS_RATIO = 0.1
MAX_SUGGESTIONS = 6

EXPLANATIONS = {
    'rent': "Housing is typically the largest expense in most budgets and should be included for accuracy.",
    'groceries': "Everyone needs to eat! Adding a groceries category helps track this essential expense.",
    'utilities': "Basic utilities are an essential monthly expense for most households.",
    'transportation': "Transportation costs are a regular expense that should be budgeted for.",
    'emergency_savings': "An emergency fund is crucial for financial security, aim for 3-6 months of expenses.",
    'investments': "Long-term investing helps grow your wealth and beat inflation over time.",
    'retirement_savings': "Setting aside money for retirement is crucial for your future financial security.",
}


class ChangeKind(str, Enum):
    ADD = 'add'
    INCREASE = 'increase'
    DECREASE = 'decrease'
    REMOVE = 'remove'


@dataclass(frozen=True)
class BudgetSuggestion:
    kind: ChangeKind
    category: BudgetCategory
    change_amount: float
    current_amount: Optional[float]
    new_amount: float
    explanation: str


def suggest_improvements(
    budget: Budget,
    catalog: CategoryCatalog,
    limit: int = MAX_SUGGESTIONS,
) -> List[BudgetSuggestion]:
    """Propose changes to ``budget`` using ``catalog`` for missing categories.

    Amounts are monthly and compared against ``income * allocation``.
    When there are more than ``limit`` suggestions, essential additions
    come first, then essential top-ups, savings additions, other top-ups,
    other additions, decreases and removals; ties go to the larger change.
    """
    income = budget.monthly_income
    surplus = budget.unused_amount
    active = [line for line in budget.lines if line.active]
    selected = {line.category.id for line in active}
    suggestions: List[BudgetSuggestion] = []

    # Missing essentials
    for category in _missing(catalog, ESSENTIAL_IDS, selected):
        amount = income * category.allocation_percentage
        if amount <= surplus:
            suggestions.append(_add(category, amount, EXPLANATIONS.get(
                category.id, "This is an essential category that should be included in your budget.")))

    # Missing savings; emergency savings is already covered above
    for category in _missing(catalog, SAVINGS_IDS, selected | {'emergency_savings'}):
        amount = min(income * category.allocation_percentage, surplus * 0.5)
        if 0 < amount <= surplus:
            suggestions.append(_add(category, amount, EXPLANATIONS.get(
                category.id, "Adding this savings category will help you build financial stability.")))

    # Underfunded essentials and savings
    for line in active:
        if line.category.id not in ESSENTIAL_IDS and line.category.id not in SAVINGS_IDS:
            continue
        recommended = income * line.category.allocation_percentage
        current = line.monthly_amount
        if current >= recommended * UNDERFUNDED_RATIO:
            continue
        difference = min(recommended - current, surplus)
        if difference > 0 and difference > current * 0.1:
            suggestions.append(BudgetSuggestion(
                ChangeKind.INCREASE, line.category, difference, current, current + difference,
                "This essential category is currently underfunded compared to recommended levels.",
            ))

    # Overfunded extras, only when the budget is in deficit
    if surplus < 0:
        for line in active:
            if line.category.id in ESSENTIAL_IDS or line.category.id in SAVINGS_IDS:
                continue
            recommended = income * line.category.allocation_percentage
            current = line.monthly_amount
            if current <= recommended * OVERFUNDED_RATIO:
                continue
            reduction = min(current - recommended, current * 0.3)
            if reduction > 0 and reduction > current * 0.1:
                suggestions.append(BudgetSuggestion(
                    ChangeKind.DECREASE, line.category, reduction, current, current - reduction,
                    "This category is significantly overfunded. Reducing it could help balance your budget.",
                ))

        for line in active:
            if (
                line.category.id not in ESSENTIAL_IDS
                and line.monthly_amount < income * SMALL_LINE_RATIO
                and priority_tier(line.category) == DISCRETIONARY
            ):
                suggestions.append(BudgetSuggestion(
                    ChangeKind.REMOVE, line.category, line.monthly_amount, line.monthly_amount, 0.0,
                    "This low-priority category has a small allocation. Removing it would simplify your budget.",
                ))

    if surplus > income * LARGE_SURPLUS_RATIO:
        for category in _missing(catalog, LIFESTYLE_IDS, selected):
            amount = min(income * category.allocation_percentage, surplus * 0.2)
            if amount > 0:
                suggestions.append(_add(
                    category, amount,
                    "With your current surplus, you could add this category to enhance your quality of life.",
                ))

    if len(suggestions) > limit:
        suggestions.sort(key=lambda s: (_rank(s), -s.change_amount))
        suggestions = suggestions[:limit]
    logger.debug("Suggested %d budget changes at surplus %.2f", len(suggestions), surplus)
    return suggestions


def projected_surplus(budget: Budget, suggestions: Iterable[BudgetSuggestion]) -> float:
    """Monthly surplus left if every suggestion were applied."""
    surplus = budget.unused_amount
    for suggestion in suggestions:
        current = suggestion.current_amount or 0.0
        surplus -= suggestion.new_amount - current
    return surplus


def apply_improvements(budget: Budget, suggestions: Iterable[BudgetSuggestion]) -> None:
    """Apply suggestions to ``budget`` in place.

    Existing lines keep their spending and display type; new lines are monthly.
    """
    for suggestion in suggestions:
        category = suggestion.category
        line = budget.line(category.id)
        if suggestion.kind == ChangeKind.REMOVE:
            budget.remove_category(category)
        elif line is None:
            budget.set_category(category, suggestion.new_amount, AmountDisplayType.MONTHLY)
        elif line.display_type == AmountDisplayType.TOTAL:
            budget.update_allocation(category.id, suggestion.new_amount * 12)
        else:
            budget.update_allocation(category.id, suggestion.new_amount)


def _missing(catalog: CategoryCatalog, ids: Iterable[str], selected: Set[str]) -> List[BudgetCategory]:
    found = []
    for category_id in ids:
        if category_id in selected:
            continue
        category = catalog.get(category_id)
        if category is not None:
            found.append(category)
    return found


def _add(category: BudgetCategory, amount: float, explanation: str) -> BudgetSuggestion:
    return BudgetSuggestion(ChangeKind.ADD, category, amount, None, amount, explanation)


def _rank(suggestion: BudgetSuggestion) -> int:
    essential = suggestion.category.id in ESSENTIAL_IDS
    if suggestion.kind == ChangeKind.ADD:
        if essential:
            return 1
        return 3 if suggestion.category.id in SAVINGS_IDS else 5
    if suggestion.kind == ChangeKind.INCREASE:
        return 2 if essential else 4
    if suggestion.kind == ChangeKind.DECREASE:
        return 6
    return 7
