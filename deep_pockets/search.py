"""Forgiving text search over budget categories.

A query matches a category when any of its words matches a word of the
category's name or description by one of, in order:

* exact word equality
* keyword association (``"auto"`` finds *Car*, ``"401k"`` finds *Retirement*)
* prefix in either direction (``"groc"`` finds *Groceries*)
* Levenshtein similarity above :data:`SIMILARITY_THRESHOLD` (typos)
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Iterable, List

from rapidfuzz.distance import Levenshtein

from .models import BudgetCategory

SIMILARITY_THRESHOLD = 0.7

_WORD_RE = re.compile(r"[^\W_]+")

CATEGORY_KEYWORDS: Dict[str, FrozenSet[str]] = {
    # Housing
    "home": frozenset({"house", "property", "residence", "apartment", "renovation", "repair",
                       "maintenance", "improvement", "dwelling"}),
    "renovation": frozenset({"home improvement", "repairs", "remodel", "upgrade", "fix",
                             "maintenance", "construction"}),
    "mortgage": frozenset({"home loan", "house payment", "property loan", "home debt",
                           "housing loan", "real estate loan"}),
    # Transportation
    "car": frozenset({"auto", "vehicle", "transportation", "automobile", "automotive"}),
    "maintenance": frozenset({"repair", "upkeep", "service", "fix", "servicing", "care"}),
    # Utilities
    "utilities": frozenset({"bills", "electric", "water", "gas", "power", "energy", "electricity"}),
    "internet": frozenset({"wifi", "broadband", "cable", "network", "connectivity"}),
    # Insurance
    "insurance": frozenset({"coverage", "protection", "policy", "premium", "assurance", "security"}),
    "health": frozenset({"medical", "healthcare", "wellness", "hospital", "doctor", "coverage"}),
    # Savings
    "savings": frozenset({"emergency fund", "reserve", "nest egg", "saving", "saved", "safety net"}),
    "investment": frozenset({"stocks", "bonds", "portfolio", "market", "mutual funds", "securities"}),
    "retirement": frozenset({"401k", "ira", "pension", "retirement savings", "superannuation"}),
    "emergency": frozenset({"rainy day", "emergency fund", "backup", "safety net", "reserve",
                            "contingency"}),
    "college": frozenset({"education savings", "university", "school", "tuition", "student savings"}),
    "vacation": frozenset({"travel savings", "holiday", "trip", "getaway", "leisure"}),
    # Debt
    "debt": frozenset({"loan", "credit", "payment", "balance", "borrowing", "financing"}),
    "credit": frozenset({"credit card", "credit cards", "card", "cards", "balance"}),
    "student": frozenset({"education loan", "college loan", "university", "school loan",
                          "student debt"}),
    "personal_loan": frozenset({"bank loan", "private loan", "signature loan", "unsecured",
                                "consumer loan"}),
    # Living expenses
    "groceries": frozenset({"food", "supermarket", "provisions", "grocery", "household items"}),
    "dining": frozenset({"restaurants", "eating out", "takeout", "food", "cafe", "dining out"}),
    # Family
    "childcare": frozenset({"daycare", "babysitting", "child care", "childminding", "nursery"}),
    "pet": frozenset({"animal", "veterinary", "vet", "pet care", "pet supplies"}),
    # Personal development
    "education": frozenset({"school", "college", "university", "tuition", "learning", "courses"}),
    "professional": frozenset({"career", "work", "job", "professional development", "training"}),
    # Personal
    "personal": frozenset({"self care", "grooming", "hygiene", "personal care"}),
    "cleaning": frozenset({"housekeeping", "maid", "janitorial", "cleaning service"}),
    "clothing": frozenset({"apparel", "clothes", "fashion", "wardrobe", "attire"}),
    "charity": frozenset({"donation", "charitable", "giving", "nonprofit", "philanthropy",
                          "contributions"}),
    "entertainment": frozenset({"fun", "leisure", "recreation", "hobby", "activities",
                                "entertainment"}),
    "medical": frozenset({"health", "healthcare", "doctor", "hospital", "medical care", "treatment"}),
}


def tokenize(text: str) -> List[str]:
    """Lowercase letter/digit runs of ``text``."""
    return _WORD_RE.findall(text.lower())


def similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in [0, 1]."""
    return Levenshtein.normalized_similarity(a, b)


def _keyword_match(source_words: List[str], target_words: List[str]) -> bool:
    for word in source_words:
        keywords = CATEGORY_KEYWORDS.get(word)
        if keywords and any(t in keywords for t in target_words):
            return True
        # the query word is itself a keyword: match its head word or siblings
        for head, group in CATEGORY_KEYWORDS.items():
            if word in group and any(t == head or t in group for t in target_words):
                return True
    return False


def fuzzy_match(source: str, target: str) -> bool:
    """True if any word of ``source`` loosely matches a word of ``target``."""
    source_words = tokenize(source)
    target_words = tokenize(target)
    if not source_words or not target_words:
        return False

    if any(word in target_words for word in source_words):
        return True
    if _keyword_match(source_words, target_words):
        return True
    for s in source_words:
        if any(t.startswith(s) or s.startswith(t) for t in target_words):
            return True
    return any(
        similarity(s, t) > SIMILARITY_THRESHOLD
        for s in source_words
        for t in target_words
    )


def search_categories(categories: Iterable[BudgetCategory], text: str) -> List[BudgetCategory]:
    """Filter ``categories`` by ``text``, keeping their order.

    Blank text returns every category.

    Example:
        >>> [c.id for c in search_categories(catalog, "auto")]  # doctest: +SKIP
        ['car', 'car_maintenance', ...]
    """
    categories = list(categories)
    if not text.strip():
        return categories

    query_words = tokenize(text)
    results = []
    for category in categories:
        if fuzzy_match(text, category.name) or fuzzy_match(text, category.description):
            results.append(category)
            continue
        name = category.name.lower()
        if any(
            word in CATEGORY_KEYWORDS and fuzzy_match(name, " ".join(sorted(CATEGORY_KEYWORDS[word])))
            for word in query_words
        ):
            results.append(category)
    return results
