from __future__ import annotations

from functools import lru_cache
from typing import Pattern

from expense_model import Category
from vocabulary import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, keyword_pattern


@lru_cache(maxsize=None)
def _compiled_category_table() -> tuple[tuple[Category, tuple[Pattern[str], ...]], ...]:
    return tuple(
        (category, tuple(keyword_pattern(keyword) for keyword in keywords))
        for category, keywords in CATEGORY_KEYWORDS.items()
    )


def classify_category(text: str | None) -> Category:
    """
    Assign a category by testing keyword sets in priority order.

    Keywords only match whole words, so "gasp" does not count as "gas". The
    first category with any hit wins; text with no hits (or no text) is "Other".
    """
    if not text:
        return DEFAULT_CATEGORY

    lowered = text.lower()
    for category, patterns in _compiled_category_table():
        if any(pattern.search(lowered) for pattern in patterns):
            return category
    return DEFAULT_CATEGORY
