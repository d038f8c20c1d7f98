"""Top-level package for the Deep Pockets budget engine.

Given a monthly income, the engine recommends spending and savings amounts
across budget categories. The primary modules are:

* ``catalog`` - the ordered category registry and its JSON seed loader
* ``engine`` - percentage rule plus the home, car and emergency-fund formulas
* ``savings`` / ``debt`` / ``purchase`` - goal and affordability planners
* ``budget`` - user budgets, spending tracking and the smart budget generator
* ``improvements`` - suggested changes to an existing budget
* ``visualization`` - Plotly figures for allocations and loan schedules

Typical use:

```python
from deep_pockets import AllocationEngine, load_default_catalog

catalog = load_default_catalog()
AllocationEngine().recompute(catalog, 6000)
catalog.get('home').recommended_amount
```
"""

from . import visualization  # noqa: F401  # re-exported for convenience
from .budget import Budget, generate_smart_budget
from .catalog import CategoryCatalog, load_default_catalog
from .engine import AllocationEngine
from .improvements import suggest_improvements
from .models import AmountDisplayType, Assumption, BudgetCategory, CategoryType
from .savings import SavingsPlanner

__all__ = [
    "AllocationEngine",
    "AmountDisplayType",
    "Assumption",
    "Budget",
    "BudgetCategory",
    "CategoryCatalog",
    "CategoryType",
    "SavingsPlanner",
    "generate_smart_budget",
    "load_default_catalog",
    "suggest_improvements",
    "visualization",
]
