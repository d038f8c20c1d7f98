"""Core data model for budget categories and their tunable assumptions.

A :class:`BudgetCategory` is a mostly static template (name, allocation
percentage, display type) plus one derived field, ``recommended_amount``,
that the allocation engine rewrites whenever income or assumptions change.
Assumption values are parsed to floats at the edit boundary (see
:mod:`deep_pockets.assumptions`), so nothing in here handles raw text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class AmountDisplayType(str, Enum):
    """Whether a recommendation is a recurring monthly figure or a total."""

    MONTHLY = 'monthly'
    TOTAL = 'total'


class CategoryType(str, Enum):
    HOUSING = 'housing'
    TRANSPORTATION = 'transportation'
    SAVINGS = 'savings'
    DEBT = 'debt'
    UTILITIES = 'utilities'
    FOOD = 'food'
    ENTERTAINMENT = 'entertainment'
    INSURANCE = 'insurance'
    EDUCATION = 'education'
    PERSONAL = 'personal'
    HEALTH = 'health'
    FAMILY = 'family'
    OTHER = 'other'


# ---------------------------------------------------------------------------
# Assumption input variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PercentageSlider:
    """Percentage in [0, 100] snapped to ``step``."""

    step: float = 1.0

    def clamp(self, value: float) -> float:
        bounded = min(100.0, max(0.0, value))
        if self.step > 0:
            bounded = round(round(bounded / self.step) * self.step, 10)
            bounded = min(100.0, max(0.0, bounded))
        return bounded


@dataclass(frozen=True)
class YearSlider:
    """Whole number of years between ``min`` and ``max`` inclusive."""

    min: int
    max: int

    def clamp(self, value: float) -> float:
        return float(min(self.max, max(self.min, round(value))))


@dataclass(frozen=True)
class TextField:
    """Free numeric entry; only negatives are rejected."""

    def clamp(self, value: float) -> float:
        return max(0.0, value)


@dataclass(frozen=True)
class PercentageDistribution:
    """One share of a split that should add up to 100."""

    def clamp(self, value: float) -> float:
        return min(100.0, max(0.0, value))


InputType = Union[PercentageSlider, YearSlider, TextField, PercentageDistribution]


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Assumption:
    """A named, user-editable input for a category formula.

    ``value`` is ``None`` when the last edit could not be parsed; formulas
    then fall back to their documented default for ``title``.
    """

    title: str
    value: Optional[float]
    input_type: InputType = field(default_factory=TextField)
    description: Optional[str] = None

    @property
    def display_value(self) -> str:
        if self.value is None:
            return ''
        text = f"{self.value:g}"
        if isinstance(self.input_type, (PercentageSlider, PercentageDistribution)):
            return text + '%'
        if isinstance(self.input_type, YearSlider):
            return text + ' years'
        return text


@dataclass
class BudgetCategory:
    id: str
    name: str
    emoji: str
    description: str
    allocation_percentage: float
    display_type: AmountDisplayType
    assumptions: List[Assumption] = field(default_factory=list)
    type: CategoryType = CategoryType.OTHER
    priority: int = 3
    recommended_amount: float = field(default=0.0, compare=False)

    # Goal semantics, only set for a few categories
    savings_goal: Optional[float] = None
    savings_timeline: Optional[int] = None  # months
    debt_amount: Optional[float] = None
    debt_interest_rate: Optional[float] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.allocation_percentage <= 1.0:
            raise ValueError(
                f"Category '{self.id}' allocation must be within [0, 1], "
                f"got {self.allocation_percentage}"
            )
        titles = [a.title for a in self.assumptions]
        duplicates = sorted({t for t in titles if titles.count(t) > 1})
        if duplicates:
            raise ValueError(f"Category '{self.id}' has duplicate assumptions: {duplicates}")

    @property
    def formatted_allocation(self) -> str:
        return f"{self.allocation_percentage * 100:.1f}%"

    def assumption(self, title: str) -> Optional[Assumption]:
        return next((a for a in self.assumptions if a.title == title), None)

    def assumption_value(self, title: str, default: float) -> float:
        """Parsed value for ``title``, or ``default`` when absent or unparsable."""
        found = self.assumption(title)
        if found is None or found.value is None:
            return default
        return found.value

    def replace_assumption(self, updated: Assumption) -> bool:
        """Swap in ``updated`` for the assumption with the same title.

        Returns ``False`` (and changes nothing) if no such title exists.
        """
        for index, current in enumerate(self.assumptions):
            if current.title == updated.title:
                self.assumptions[index] = updated
                return True
        return False
