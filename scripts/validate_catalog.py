#!/usr/bin/env python3
"""Lightweight validator for the category seed JSON."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from deep_pockets.models import AmountDisplayType, CategoryType

CATALOG_PATH = PROJECT_ROOT / "deep_pockets" / "data" / "categories.json"

INPUT_KINDS = {"percentage_slider", "year_slider", "text_field", "percentage_distribution"}
DISPLAY_TYPES = {t.value for t in AmountDisplayType}
CATEGORY_TYPES = {t.value for t in CategoryType}


def validate_category(raw: Dict[str, Any]) -> List[str]:
    errors = []
    for key in ("id", "name", "allocation_percentage"):
        if key not in raw:
            errors.append(f"missing '{key}'")

    allocation = raw.get("allocation_percentage")
    if isinstance(allocation, (int, float)) and not 0 <= allocation <= 1:
        errors.append(f"allocation_percentage {allocation} outside [0, 1]")

    if raw.get("display_type", "monthly") not in DISPLAY_TYPES:
        errors.append(f"unknown display_type '{raw.get('display_type')}'")
    if raw.get("type", "other") not in CATEGORY_TYPES:
        errors.append(f"unknown type '{raw.get('type')}'")

    titles = set()
    for assumption in raw.get("assumptions", []):
        title = assumption.get("title")
        if title in titles:
            errors.append(f"duplicate assumption '{title}'")
        titles.add(title)
        kind = (assumption.get("input_type") or {}).get("kind", "text_field")
        if kind not in INPUT_KINDS:
            errors.append(f"assumption '{title}' has unknown input kind '{kind}'")
    return errors


def validate_catalog(data: Dict[str, Any]) -> List[Tuple[str, str]]:
    """Return ``(category id or position, '; '-joined errors)`` per bad entry.

    Entries sharing an id are reported separately.
    """
    issues: List[Tuple[str, str]] = []
    seen = set()
    for index, raw in enumerate(data.get("categories", [])):
        key = str(raw.get("id", f"#{index}"))
        errors = validate_category(raw)
        if key in seen:
            errors.append("duplicate id")
        seen.add(key)
        if errors:
            issues.append((key, "; ".join(errors)))
    return issues


def main(path: Optional[Path] = None) -> int:
    path = path or CATALOG_PATH
    if not path.exists():
        print(f"Catalog file not found: {path}")
        return 1

    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)

    if "categories" not in data:
        print("Catalog validation failed: missing 'categories' block")
        return 1

    issues = validate_catalog(data)
    if issues:
        print("Catalog validation failed:")
        for category_id, message in issues:
            print(f"  - {category_id}: {message}")
        return 1

    print(f"All {len(data['categories'])} categories validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
