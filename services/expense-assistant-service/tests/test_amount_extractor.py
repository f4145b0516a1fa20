"""Tests for amount_extractor.py - ordered monetary pattern matching."""

from decimal import Decimal

import pytest
from amount_extractor import extract_amount, find_amount


class TestCurrencyAfterNumber:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("150 rupees", Decimal("150")),
            ("1 rupee for a toffee", Decimal("1")),
            ("lunch was 120 rs", Decimal("120")),
            ("autorickshaw 80 INR", Decimal("80")),
            ("tea 15₹", Decimal("15")),
            ("1,200 rupees on groceries", Decimal("1200")),
            ("99.99 rupees for a notebook", Decimal("99.99")),
        ],
    )
    def test_number_followed_by_currency(self, text, expected):
        assert extract_amount(text) == expected

    def test_currency_suffix_outranks_spending_verb(self):
        """The first pattern in the table wins even when a later one matches earlier text."""
        result = find_amount("paid 10 for parking and 150 rupees for lunch")

        assert result.value == Decimal("150")
        assert result.pattern == "number_then_currency"

    def test_currency_suffix_phrase_is_kept_in_description(self):
        result = find_amount("I spent 25 rupees on lunch")

        assert result.strip_from_description is False
        assert "I spent 25 rupees on lunch"[slice(*result.span)] == "25 rupees"


class TestSpendingVerb:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("spent 40 on snacks", Decimal("40")),
            ("paid 60 dollars for gas", Decimal("60")),
            ("it cost about 300", Decimal("300")),
            ("dinner cost around ₹450", Decimal("450")),
            ("movie tickets worth rs 500", Decimal("500")),
        ],
    )
    def test_spending_verb_then_number(self, text, expected):
        assert extract_amount(text) == expected

    def test_phrase_span_excludes_the_verb(self):
        text = "paid 60 dollars for gas"
        result = find_amount(text)

        assert result.pattern == "spending_verb"
        assert text[slice(*result.span)] == "60 dollars"


class TestCurrencyBeforeNumber:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("₹75.50", Decimal("75.50")),
            ("Rs. 500 for medicines", Decimal("500")),
            ("$20 on uber", Decimal("20")),
            ("INR 1,250 electricity", Decimal("1250")),
        ],
    )
    def test_marker_then_number(self, text, expected):
        assert extract_amount(text) == expected


class TestLegacyPhrasing:
    def test_dollars(self):
        result = find_amount("Grocery shopping came to 120 dollars")

        assert result.value == Decimal("120")
        assert result.pattern == "legacy_dollars"

    def test_bucks(self):
        result = find_amount("coffee was 8 bucks")

        assert result.value == Decimal("8")
        assert result.pattern == "colloquial_bucks"


class TestNoMatch:
    @pytest.mark.parametrize("text", ["paid for gas", "bought 2 pizzas", "random mumbling", "", None, "   "])
    def test_absent_amount_returns_none(self, text):
        assert extract_amount(text) is None

    def test_zero_is_distinguishable_from_absent(self):
        amount = extract_amount("0 rupees")

        assert amount is not None
        assert amount == Decimal("0")

    def test_result_has_two_decimal_places(self):
        assert extract_amount("₹7.5").as_tuple().exponent == -2
