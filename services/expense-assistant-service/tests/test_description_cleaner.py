"""Tests for description_cleaner.py - human-readable expense labels."""

from amount_extractor import find_amount
from description_cleaner import clean_description


def _clean(text, category="Other"):
    return clean_description(text, find_amount(text), category)


def test_keeps_currency_suffixed_amount_and_strips_filler():
    assert _clean("I spent 25 rupees on lunch at Subway", "Food") == "25 rupees on lunch at Subway"


def test_strips_spending_verb_amount():
    assert _clean("paid 60 dollars for gas", "Transport") == "for gas"


def test_strips_amount_then_filler_and_punctuation():
    assert _clean("I spent 40 on snacks.", "Food") == "on snacks"


def test_strips_prefixed_currency_amount():
    assert _clean("₹75.50 at the cafe", "Food") == "at the cafe"


def test_strips_bought_and_got_fillers():
    assert _clean("bought vegetables", "Groceries") == "vegetables"
    assert _clean("I got a haircut", "Other") == "a haircut"


def test_empty_result_falls_back_to_category_label():
    assert _clean("₹75.50", "Food") == "Food expense"
    assert _clean("I paid 300", "Utilities") == "Utilities expense"


def test_without_amount_match_only_filler_is_removed():
    assert clean_description("I paid the plumber", None, "Other") == "the plumber"


def test_does_not_mutate_input():
    text = "I spent 40 on snacks."
    _clean(text, "Food")

    assert text == "I spent 40 on snacks."
