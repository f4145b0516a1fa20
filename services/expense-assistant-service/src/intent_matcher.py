"""
Intent matcher for advisor queries.

Maps a free-text question onto one of the fixed advisory intents with the
ordered keyword table in `vocabulary.INTENT_KEYWORDS`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Pattern

from expense_model import AdvisoryIntent
from vocabulary import DEFAULT_INTENT, INTENT_KEYWORDS, INTENT_OVERRIDES, keyword_pattern


@dataclass(frozen=True)
class IntentMatch:
    """The winning intent plus the keyword that selected it (None for unknown)."""

    intent: AdvisoryIntent
    keyword: str | None = None


@lru_cache(maxsize=None)
def _compiled_intent_table() -> tuple[tuple[AdvisoryIntent, tuple[tuple[str, Pattern[str]], ...]], ...]:
    return tuple(
        (intent, tuple((keyword, keyword_pattern(keyword, whole_word=False)) for keyword in keywords))
        for intent, keywords in INTENT_KEYWORDS.items()
    )


@lru_cache(maxsize=None)
def _compiled_overrides() -> tuple[tuple[str, AdvisoryIntent, Pattern[str]], ...]:
    return tuple((phrase, intent, keyword_pattern(phrase, whole_word=False)) for phrase, intent in INTENT_OVERRIDES)


def analyze_intent(query: str | None) -> IntentMatch:
    """
    Classify a query into an advisory intent.

    Override phrases such as "reduce spending" are checked first, since they
    embed the higher-priority "spending" keyword. Otherwise keywords are tested
    in table order (spending analysis, savings/budget, goal planning, investment,
    expense reduction) and the first intent with a hit wins. No hit (or a blank
    query) yields "unknown".
    """
    if not query or not query.strip():
        return IntentMatch(intent=DEFAULT_INTENT)

    lowered = query.lower().strip()
    for phrase, intent, pattern in _compiled_overrides():
        if pattern.search(lowered):
            return IntentMatch(intent=intent, keyword=phrase)

    for intent, keywords in _compiled_intent_table():
        for keyword, pattern in keywords:
            if pattern.search(lowered):
                return IntentMatch(intent=intent, keyword=keyword)
    return IntentMatch(intent=DEFAULT_INTENT)


def match_intent(query: str | None) -> AdvisoryIntent:
    return analyze_intent(query).intent


def get_intent_description(intent: AdvisoryIntent) -> str:
    """Get a human-readable description of an intent."""
    descriptions = {
        "spending_analysis": "analyzing your spending",
        "savings_budget": "saving and budgeting",
        "goal_planning": "planning a savings goal",
        "investment": "investing",
        "expense_reduction": "reducing expenses",
        "unknown": "general questions",
    }
    return descriptions.get(intent, "general questions")
