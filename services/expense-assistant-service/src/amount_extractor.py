from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from expense_model import AmountMatch
from money import parse_amount
from vocabulary import AMOUNT_PATTERNS, AmountPattern


def find_amount(text: str | None, patterns: Sequence[AmountPattern] = AMOUNT_PATTERNS) -> AmountMatch | None:
    """
    Locate the monetary value in free text using the ordered pattern table.

    Args:
        text: Transcript or any free text; None and blank strings never match.
        patterns: Priority-ordered patterns. The first one that matches wins and
            later patterns are not tried.
    Returns:
        AmountMatch with the parsed value and the span of the matched phrase, or
        None when no pattern matches. A matched zero is returned as Decimal 0 so
        callers can tell "zero" apart from "no amount".
    """
    if not text:
        return None

    for pattern in patterns:
        match = pattern.regex.search(text)
        if match is None:
            continue
        value = parse_amount(match.group("amount"))
        if value is None:
            continue
        return AmountMatch(
            value=value,
            span=match.span("phrase"),
            pattern=pattern.name,
            strip_from_description=pattern.strip_from_description,
        )
    return None


def extract_amount(text: str | None) -> Decimal | None:
    """Return the first captured amount as a Decimal, or None when absent."""
    amount_match = find_amount(text)
    return amount_match.value if amount_match else None
