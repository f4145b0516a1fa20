from __future__ import annotations

import re

from expense_model import AmountMatch, Category
from vocabulary import FILLER_PREFIX

_WHITESPACE_RUN = re.compile(r"\s+")
_EDGE_CHARACTERS = " \t\r\n.,;:!?-–—\"'"


def clean_description(text: str, amount_match: AmountMatch | None, category: Category) -> str:
    """
    Build a human-readable label for an expense from its transcript.

    Removes the matched amount phrase (when its pattern asks for it), strips a
    leading "I spent/paid/bought/got" filler, then trims whitespace and
    punctuation. Falls back to "<category> expense" when nothing is left. The
    input string is never modified; a new string is returned.
    """
    remaining = text or ""
    if amount_match is not None and amount_match.strip_from_description:
        start, end = amount_match.span
        remaining = f"{remaining[:start]} {remaining[end:]}"

    remaining = _WHITESPACE_RUN.sub(" ", remaining).strip()
    remaining = FILLER_PREFIX.sub("", remaining, count=1)
    remaining = remaining.strip(_EDGE_CHARACTERS)

    return remaining or f"{category} expense"
