"""User budgets built from category recommendations.

A :class:`Budget` holds the monthly amounts a user has chosen for a subset
of categories, tracks what has been spent against each line, and reports
monthly totals by group. :func:`generate_smart_budget` proposes such a
budget from a catalog, filling essential categories first and scaling the
rest to fit.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import pandas as pd

from .catalog import CategoryCatalog
from .models import AmountDisplayType, BudgetCategory, CategoryType

logger = logging.getLogger(__name__)

# Smart budget policy
TARGET_SURPLUS = 0.15
MAX_HOUSING_RATIO = 0.28
MIN_RETIREMENT_RATIO = 0.15
MIN_EMERGENCY_SAVINGS = 1000.0  # per year
MAX_EMERGENCY_RATIO = 0.20

ESSENTIAL, IMPORTANT, DISCRETIONARY = 1, 2, 3

CUSTOM_PREFIX = 'custom_'

# Smart budget order within a priority tier: savings first, debt near the end
ALLOCATION_ORDER: Dict[CategoryType, int] = {
    CategoryType.SAVINGS: 1,
    CategoryType.HOUSING: 2,
    CategoryType.UTILITIES: 3,
    CategoryType.FOOD: 4,
    CategoryType.HEALTH: 5,
    CategoryType.INSURANCE: 6,
    CategoryType.TRANSPORTATION: 7,
    CategoryType.FAMILY: 8,
    CategoryType.EDUCATION: 9,
    CategoryType.PERSONAL: 10,
    CategoryType.ENTERTAINMENT: 11,
    CategoryType.DEBT: 12,
    CategoryType.OTHER: 13,
}

FRAME_COLUMNS = ['id', 'name', 'type', 'amount', 'monthly_amount', 'spent', 'remaining', 'active']


@dataclass
class BudgetLine:
    category: BudgetCategory
    amount: float
    display_type: AmountDisplayType = AmountDisplayType.MONTHLY
    spent: float = 0.0
    active: bool = True

    @property
    def monthly_amount(self) -> float:
        if self.display_type == AmountDisplayType.TOTAL:
            return self.amount / 12
        return self.amount

    @property
    def remaining_amount(self) -> float:
        return self.amount - self.spent

    @property
    def percentage_spent(self) -> float:
        """Spent share of the allocation in percent; 0 for an empty allocation."""
        if self.amount <= 0:
            return 0.0
        return self.spent / self.amount * 100


class Budget:
    """Chosen amounts per category, keyed by category id.

    Totals count active lines only; toggled-off lines stay in the budget
    but are ignored until switched back on.
    """

    def __init__(self, monthly_income: float = 0.0) -> None:
        self.monthly_income = max(0.0, monthly_income)
        self._lines: Dict[str, BudgetLine] = {}

    @classmethod
    def from_recommendations(
        cls,
        catalog: CategoryCatalog,
        category_ids: Iterable[str],
        monthly_income: float,
    ) -> 'Budget':
        """Seed a budget with each category's share of monthly income.

        Every line is monthly: ``monthly_income * allocation_percentage``.
        A category's ``recommended_amount`` is not used, since for TOTAL
        categories it is a purchase price or a fund target rather than a
        spend. Ids missing from the catalog are skipped.
        """
        budget = cls(monthly_income)
        wanted = set(category_ids)
        for category in catalog:
            if category.id not in wanted:
                continue
            budget.set_category(
                category,
                budget.monthly_income * category.allocation_percentage,
                AmountDisplayType.MONTHLY,
            )
        for category_id in wanted.difference(budget._lines):
            logger.debug("Skipping unknown category '%s'", category_id)
        return budget

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> List[BudgetLine]:
        return list(self._lines.values())

    def line(self, category_id: str) -> Optional[BudgetLine]:
        return self._lines.get(category_id)

    def is_selected(self, category: BudgetCategory) -> bool:
        return category.id in self._lines

    def set_category(
        self,
        category: BudgetCategory,
        amount: float,
        display_type: Optional[AmountDisplayType] = None,
    ) -> None:
        """Add or replace the line for ``category``.

        ``display_type`` defaults to the category's own.
        """
        self._lines[category.id] = BudgetLine(
            category, float(amount), display_type or category.display_type
        )

    def remove_category(self, category: BudgetCategory) -> None:
        self._lines.pop(category.id, None)

    def get_amount(self, category: BudgetCategory) -> Optional[float]:
        line = self._lines.get(category.id)
        return line.amount if line else None

    # Tracking ---------------------------------------------------------------

    def update_allocation(self, category_id: str, amount: float) -> bool:
        line = self._lines.get(category_id)
        if line is None:
            logger.debug("No budget line '%s' to reallocate", category_id)
            return False
        line.amount = float(amount)
        return True

    def update_spent_amount(self, category_id: str, amount: float) -> bool:
        line = self._lines.get(category_id)
        if line is None:
            logger.debug("No budget line '%s' to record spending on", category_id)
            return False
        line.spent = float(amount)
        return True

    def toggle_category(self, category_id: str) -> Optional[bool]:
        """Flip a line between active and inactive.

        Returns the new state, or ``None`` if the id is not in the budget.
        """
        line = self._lines.get(category_id)
        if line is None:
            return None
        line.active = not line.active
        return line.active

    def add_custom_category(
        self,
        name: str,
        emoji: str,
        amount: float,
        savings: bool = False,
        priority: int = DISCRETIONARY,
    ) -> BudgetCategory:
        """Create a user-defined category and add a monthly line for it.

        The category's allocation is ``amount / monthly_income``, capped at
        100 %; with no income it is 0.
        """
        share = amount / self.monthly_income if self.monthly_income > 0 else 0.0
        category = BudgetCategory(
            id=f"{CUSTOM_PREFIX}{uuid.uuid4().hex}",
            name=name,
            emoji=emoji,
            description='Custom category',
            allocation_percentage=min(1.0, max(0.0, share)),
            display_type=AmountDisplayType.MONTHLY,
            type=CategoryType.SAVINGS if savings else CategoryType.OTHER,
            priority=priority,
        )
        self.set_category(category, amount)
        return category

    def can_delete_category(self, category_id: str) -> bool:
        """Custom lines can always go; essential ones cannot."""
        line = self._lines.get(category_id)
        if line is None:
            return False
        if category_id.startswith(CUSTOM_PREFIX):
            return True
        return priority_tier(line.category) != ESSENTIAL

    # Groupings --------------------------------------------------------------

    def debt_lines(self) -> List[BudgetLine]:
        return self._sorted(line for line in self._lines.values() if line.category.type == CategoryType.DEBT)

    def savings_lines(self) -> List[BudgetLine]:
        return self._sorted(line for line in self._lines.values() if line.category.type == CategoryType.SAVINGS)

    def expense_lines(self) -> List[BudgetLine]:
        grouped = {CategoryType.DEBT, CategoryType.SAVINGS}
        return self._sorted(line for line in self._lines.values() if line.category.type not in grouped)

    # Totals -----------------------------------------------------------------

    @property
    def total_monthly_budget(self) -> float:
        return _monthly_total(self._lines.values())

    @property
    def total_debt_payments(self) -> float:
        return _monthly_total(self.debt_lines())

    @property
    def total_monthly_expenses(self) -> float:
        return _monthly_total(self.expense_lines())

    @property
    def total_monthly_savings(self) -> float:
        return _monthly_total(self.savings_lines())

    @property
    def unused_amount(self) -> float:
        return self.monthly_income - self.total_monthly_budget

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                'id': line.category.id,
                'name': line.category.name,
                'type': line.category.type.value,
                'amount': line.amount,
                'monthly_amount': line.monthly_amount,
                'spent': line.spent,
                'remaining': line.remaining_amount,
                'active': line.active,
            }
            for line in self._lines.values()
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    @staticmethod
    def _sorted(lines: Iterable[BudgetLine]) -> List[BudgetLine]:
        return sorted(lines, key=lambda line: line.category.name)


def _monthly_total(lines: Iterable[BudgetLine]) -> float:
    return sum(line.monthly_amount for line in lines if line.active)


def priority_tier(category: BudgetCategory) -> int:
    if category.priority <= ESSENTIAL:
        return ESSENTIAL
    if category.priority == IMPORTANT:
        return IMPORTANT
    return DISCRETIONARY


def allocation_sort_key(category: BudgetCategory):
    return priority_tier(category), ALLOCATION_ORDER.get(category.type, len(ALLOCATION_ORDER) + 1)


def base_allocation(category: BudgetCategory, available_income: float) -> float:
    """Monthly starting point for a category before tiers are scaled."""
    base = available_income * category.allocation_percentage
    if category.type == CategoryType.DEBT:
        return 0.0
    if category.type == CategoryType.HOUSING:
        return min(available_income * MAX_HOUSING_RATIO, base)
    if category.id == 'emergency_savings':
        return min(max(base, MIN_EMERGENCY_SAVINGS / 12), available_income * MAX_EMERGENCY_RATIO)
    if category.id == 'retirement_savings':
        return max(available_income * MIN_RETIREMENT_RATIO, base)
    return base


def generate_smart_budget(
    catalog: CategoryCatalog,
    monthly_income: float,
    category_ids: Optional[Iterable[str]] = None,
) -> Budget:
    """Propose a monthly budget that leaves a surplus.

    Essential categories are funded in full, then important ones, then
    discretionary ones; a tier that does not fit is scaled down
    proportionally. Every line is a monthly amount and zero lines are
    dropped. Lines come out ordered by priority tier, then by
    :data:`ALLOCATION_ORDER`, then by catalog position.
    """
    income = max(0.0, monthly_income)
    available = income * (1 - TARGET_SURPLUS)
    wanted = set(category_ids) if category_ids is not None else None
    categories = sorted(
        (c for c in catalog if wanted is None or c.id in wanted),
        key=allocation_sort_key,
    )

    tiers: Dict[int, List[BudgetCategory]] = {ESSENTIAL: [], IMPORTANT: [], DISCRETIONARY: []}
    for category in categories:
        tiers[priority_tier(category)].append(category)
    base = {c.id: base_allocation(c, available) for c in categories}

    allocations: Dict[str, float] = {}
    remaining = available
    for tier in (ESSENTIAL, IMPORTANT, DISCRETIONARY):
        members = tiers[tier]
        total = sum(base[c.id] for c in members)
        if tier == ESSENTIAL or total <= remaining:
            scale = 1.0
            remaining -= total
        elif remaining <= 0:
            scale = 0.0
        else:
            scale = remaining / total
            remaining = 0.0
        if scale < 1.0 and members:
            logger.debug("Scaling priority tier %d by %.3f to fit income", tier, scale)
        for category in members:
            allocations[category.id] = base[category.id] * scale

    budget = Budget(income)
    for category in categories:
        amount = allocations.get(category.id, 0.0)
        if amount > 0:
            budget.set_category(category, amount, AmountDisplayType.MONTHLY)
    return budget
