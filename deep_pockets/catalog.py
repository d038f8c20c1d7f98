"""Category catalog: the ordered, id-keyed registry of budget categories.

A catalog is an ordinary value owned by the caller. Build one per session
(or per test) with :func:`load_default_catalog`; nothing here is shared at
module level, so two catalogs never see each other's edits.

The catalog has no internal locking. Hosts that can edit assumptions from
several threads must serialize calls themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from .assumptions import apply_edit, assumption_from_config
from .data import get_catalog_config
from .models import AmountDisplayType, BudgetCategory, CategoryType

logger = logging.getLogger(__name__)

AssumptionEdits = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]

FRAME_COLUMNS = [
    'id',
    'name',
    'emoji',
    'type',
    'display_type',
    'allocation_percentage',
    'recommended_amount',
    'priority',
]


def category_from_config(raw: Mapping[str, Any]) -> BudgetCategory:
    """Build a :class:`BudgetCategory` from one seed entry.

    Raises:
        KeyError: If a required field is missing
        ValueError: If an enum value, input type, or allocation is invalid
    """
    return BudgetCategory(
        id=str(raw['id']),
        name=str(raw['name']),
        emoji=str(raw.get('emoji', '')),
        description=str(raw.get('description', '')),
        allocation_percentage=float(raw['allocation_percentage']),
        display_type=AmountDisplayType(raw.get('display_type', 'monthly')),
        assumptions=[assumption_from_config(a) for a in raw.get('assumptions', [])],
        type=CategoryType(raw.get('type', 'other')),
        priority=int(raw.get('priority', 3)),
        savings_goal=_optional_float(raw.get('savings_goal')),
        savings_timeline=_optional_int(raw.get('savings_timeline')),
        debt_amount=_optional_float(raw.get('debt_amount')),
        debt_interest_rate=_optional_float(raw.get('debt_interest_rate')),
    )


class CategoryCatalog:
    """Ordered registry of budget categories keyed by id."""

    def __init__(self, categories: Iterable[BudgetCategory] = ()) -> None:
        self._categories: Dict[str, BudgetCategory] = {}
        for category in categories:
            if category.id in self._categories:
                raise ValueError(f"Duplicate category id '{category.id}'")
            self._categories[category.id] = category

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'CategoryCatalog':
        return cls(category_from_config(raw) for raw in config.get('categories', []))

    # Lookup -----------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[BudgetCategory]:
        return iter(self._categories.values())

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._categories

    def get(self, category_id: str) -> Optional[BudgetCategory]:
        return self._categories.get(category_id)

    def all(self) -> List[BudgetCategory]:
        return list(self._categories.values())

    def ids(self) -> List[str]:
        return list(self._categories)

    def by_type(self, category_type: CategoryType) -> List[BudgetCategory]:
        return [c for c in self._categories.values() if c.type == category_type]

    def debt_categories(self) -> List[BudgetCategory]:
        return self.by_type(CategoryType.DEBT)

    def savings_categories(self) -> List[BudgetCategory]:
        return self.by_type(CategoryType.SAVINGS)

    # Mutation ---------------------------------------------------------------

    def set_recommended_amount(self, category_id: str, amount: float) -> None:
        """Store ``amount`` on the category; unknown ids are ignored."""
        category = self._categories.get(category_id)
        if category is None:
            logger.debug("Ignoring recommended amount for unknown category '%s'", category_id)
            return
        category.recommended_amount = float(amount)

    def update_assumption(self, category_id: str, title: str, text: Any) -> bool:
        """Parse ``text`` and store it as the new value of an assumption.

        Returns ``False`` without changing anything when the category or the
        assumption title is unknown.
        """
        category = self._categories.get(category_id)
        if category is None:
            logger.debug("Ignoring assumption edit for unknown category '%s'", category_id)
            return False
        current = category.assumption(title)
        if current is None:
            logger.debug("Category '%s' has no assumption '%s'", category_id, title)
            return False
        return category.replace_assumption(apply_edit(current, text))

    def update_assumptions(self, category_id: str, edits: AssumptionEdits) -> int:
        """Apply several ``(title, text)`` edits to one category.

        Returns the number of edits that were applied.
        """
        pairs = edits.items() if isinstance(edits, Mapping) else edits
        return sum(1 for title, text in pairs if self.update_assumption(category_id, title, text))

    def apply_assumption_edits(self, edits: Mapping[str, AssumptionEdits]) -> int:
        """Apply edits for many categories: ``{category_id: [(title, text), ...]}``."""
        return sum(self.update_assumptions(cid, cat_edits) for cid, cat_edits in edits.items())

    # Reporting --------------------------------------------------------------

    def to_frame(self) -> pd.DataFrame:
        """One row per category in catalog order."""
        rows = [
            {
                'id': c.id,
                'name': c.name,
                'emoji': c.emoji,
                'type': c.type.value,
                'display_type': c.display_type.value,
                'allocation_percentage': c.allocation_percentage,
                'recommended_amount': c.recommended_amount,
                'priority': c.priority,
            }
            for c in self._categories.values()
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def load_default_catalog(path: Optional[Path] = None) -> CategoryCatalog:
    """Build a fresh catalog from the JSON seed.

    Args:
        path: Optional seed file; defaults to the packaged ``categories.json``
              or ``DEEP_POCKETS_CATALOG_PATH`` when set.
    """
    return CategoryCatalog.from_config(get_catalog_config(path))


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)
