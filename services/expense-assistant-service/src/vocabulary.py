"""
Static vocabulary shared by the extraction and advisor pipelines.

Every table here is ordered and order is priority: the first amount pattern that
matches wins, and the first category (or intent) whose keyword set hits wins.
INTENT_OVERRIDES is the one exception and is consulted before the intent table.
Callers that extend the vocabulary should bump VOCABULARY_VERSION.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern

from expense_model import AdvisoryIntent, Category

VOCABULARY_VERSION = "2024.2"

# A number with optional digit grouping ("1,200", "8,00,000") and up to two decimals.
_NUMBER = r"(?<![\d.,])(?P<amount>\d+(?:,\d{2,3})*(?:\.\d{1,2})?)(?![.,]?\d)"
_CURRENCY_SUFFIX = r"(?:rupees?(?![a-z])|rs(?![a-z])\.?|inr(?![a-z])|₹)"
_CURRENCY_MARKER = r"(?:₹|\$|\b(?:rs\.?|inr)(?![a-z]))"
_ANY_CURRENCY_WORD = rf"(?:{_CURRENCY_SUFFIX}|dollars?(?![a-z])|usd(?![a-z])|bucks?(?![a-z]))"


@dataclass(frozen=True)
class AmountPattern:
    """
    One entry of the ordered amount-pattern table.

    `regex` must expose an ``amount`` group (the number) and a ``phrase`` group
    (the text the description cleaner removes when `strip_from_description`).
    """

    name: str
    regex: Pattern[str]
    strip_from_description: bool = True


AMOUNT_PATTERNS: tuple[AmountPattern, ...] = (
    # "150 rupees", "25 rs", "75₹". The phrase stays in the description label.
    AmountPattern(
        name="number_then_currency",
        regex=re.compile(rf"(?P<phrase>{_NUMBER}\s*{_CURRENCY_SUFFIX})", re.IGNORECASE),
        strip_from_description=False,
    ),
    # "spent 40", "paid about ₹60", "cost around 300 dollars".
    AmountPattern(
        name="spending_verb",
        regex=re.compile(
            rf"\b(?:spent|paid|cost|worth)\s+(?:(?:about|around)\s+)?"
            rf"(?P<phrase>(?:{_CURRENCY_MARKER}\s*)?{_NUMBER}(?:\s*{_ANY_CURRENCY_WORD})?)",
            re.IGNORECASE,
        ),
    ),
    # "₹75.50", "Rs. 500", "$20".
    AmountPattern(
        name="currency_then_number",
        regex=re.compile(rf"(?P<phrase>{_CURRENCY_MARKER}\s*{_NUMBER})", re.IGNORECASE),
    ),
    # Legacy phrasing kept for transcripts recorded before rupee support.
    AmountPattern(
        name="legacy_dollars",
        regex=re.compile(rf"(?P<phrase>{_NUMBER}\s*(?:dollars?|usd)(?![a-z]))", re.IGNORECASE),
    ),
    AmountPattern(
        name="colloquial_bucks",
        regex=re.compile(rf"(?P<phrase>{_NUMBER}\s*bucks?(?![a-z]))", re.IGNORECASE),
    ),
)

# Matched against lower-cased text on whole words; multi-word entries allow any whitespace run.
CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    "Food": (
        "lunch",
        "dinner",
        "breakfast",
        "brunch",
        "food",
        "meal",
        "snack",
        "snacks",
        "coffee",
        "tea",
        "restaurant",
        "cafe",
        "pizza",
        "burger",
        "biryani",
        "starbucks",
        "swiggy",
        "zomato",
        "takeout",
    ),
    "Transport": (
        "gas",
        "fuel",
        "petrol",
        "diesel",
        "uber",
        "ola",
        "taxi",
        "cab",
        "auto",
        "rickshaw",
        "bus",
        "train",
        "metro",
        "parking",
        "toll",
        "flight",
    ),
    "Groceries": (
        "grocery",
        "groceries",
        "supermarket",
        "shopping",
        "milk",
        "bread",
        "eggs",
        "vegetables",
        "fruits",
        "rice",
        "kirana",
    ),
    "Entertainment": (
        "movie",
        "movies",
        "cinema",
        "netflix",
        "spotify",
        "concert",
        "game",
        "games",
        "party",
        "show",
    ),
    "Healthcare": (
        "doctor",
        "medicine",
        "medicines",
        "pharmacy",
        "chemist",
        "hospital",
        "clinic",
        "dentist",
        "medical",
        "checkup",
    ),
    "Utilities": (
        "electricity",
        "water bill",
        "internet",
        "wifi",
        "broadband",
        "phone bill",
        "mobile recharge",
        "recharge",
        "utility",
        "utilities",
    ),
}

DEFAULT_CATEGORY: Category = "Other"

# Matched against lower-cased text at word starts, so "invest" also covers "investment".
INTENT_KEYWORDS: dict[AdvisoryIntent, tuple[str, ...]] = {
    "spending_analysis": ("spending", "analysis", "analyse", "analyze"),
    "savings_budget": ("save", "saving", "budget"),
    "goal_planning": ("goal", "plan"),
    "investment": ("invest", "sip", "mutual fund"),
    "expense_reduction": ("reduce", "reducing", "cut"),
}

# Reduction phrases that embed the higher-priority "spending" keyword. Checked before
# INTENT_KEYWORDS; every other query follows the table order.
INTENT_OVERRIDES: tuple[tuple[str, AdvisoryIntent], ...] = (
    ("reduce spending", "expense_reduction"),
    ("reduce my spending", "expense_reduction"),
    ("reducing spending", "expense_reduction"),
    ("reducing my spending", "expense_reduction"),
    ("cut spending", "expense_reduction"),
    ("cut my spending", "expense_reduction"),
    ("cut back on spending", "expense_reduction"),
    ("cut down on spending", "expense_reduction"),
)

DEFAULT_INTENT: AdvisoryIntent = "unknown"

FILLER_PREFIX = re.compile(r"^\s*(?:i\s+)?(?:spent|paid|bought|got)\b[\s,:-]*", re.IGNORECASE)


def keyword_pattern(keyword: str, *, whole_word: bool = True) -> Pattern[str]:
    """Compile a keyword so it only matches on word boundaries."""
    body = r"\s+".join(re.escape(part) for part in keyword.split())
    suffix = r"\b" if whole_word else ""
    return re.compile(rf"\b{body}{suffix}")
