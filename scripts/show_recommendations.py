#!/usr/bin/env python3
"""Print recommended amounts for every category at a given income."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from deep_pockets import AllocationEngine, generate_smart_budget, load_default_catalog
from deep_pockets.config import configure_logging
from deep_pockets.formatting import format_currency


def main(income: float, smart: bool = False) -> None:
    configure_logging()
    catalog = load_default_catalog()
    AllocationEngine().recompute(catalog, income)

    print(f"Monthly income: {format_currency(income)}")
    df = catalog.to_frame()
    df['recommended'] = df['recommended_amount'].map(format_currency)
    print("\nRecommendations:")
    print(df[['emoji', 'name', 'display_type', 'recommended']].to_string(index=False))

    if smart:
        budget = generate_smart_budget(catalog, income)
        print("\nSmart budget:")
        print(budget.to_frame()[['name', 'monthly_amount']].to_string(index=False))
        print(f"\nUnused each month: {format_currency(budget.unused_amount)}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show category recommendations for an income.')
    parser.add_argument('--income', type=float, default=5000, help='Monthly take-home income')
    parser.add_argument('--smart', action='store_true', help='Also print a generated smart budget')
    args = parser.parse_args()
    main(income=args.income, smart=args.smart)
