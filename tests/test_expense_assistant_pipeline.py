"""End-to-end checks for transcript → expense record → aggregates → advice."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from conversation import ConversationLog, respond_to_query, start_conversation
from expense_extractor import build_expense_record
from expense_model import ExpenseRecord

TODAY = date(2024, 5, 1)


@pytest.mark.integration
def test_spoken_lunch_becomes_food_record() -> None:
    result = build_expense_record("I spent 25 rupees on lunch at Subway", TODAY)

    assert result.ok
    assert result.record == ExpenseRecord(
        amount=Decimal("25.00"),
        category="Food",
        description="25 rupees on lunch at Subway",
        date=TODAY,
    )


@pytest.mark.integration
def test_transcript_without_amount_is_rejected() -> None:
    result = build_expense_record("paid for gas", TODAY)

    assert not result.ok
    assert result.record is None
    assert result.failure.kind == "amount_not_found"


@pytest.mark.integration
def test_savings_question_cites_total_and_target() -> None:
    expenses = [
        ExpenseRecord(Decimal("600"), "Groceries", "weekly shop", TODAY),
        ExpenseRecord(Decimal("400"), "Transport", "metro card", TODAY),
    ]
    log = ConversationLog()

    message = respond_to_query("How can I save more money?", expenses, log)

    assert message.tag == "recommendation"
    assert "₹1000" in message.content
    assert "₹400" in message.content
    assert [item.role for item in log] == ["user", "assistant"]


@pytest.mark.integration
def test_reduce_spending_warns_about_top_category() -> None:
    expenses = [
        ExpenseRecord(Decimal("300"), "Food", "dinners out", TODAY),
        ExpenseRecord(Decimal("120"), "Transport", "cabs", TODAY),
    ]
    log = start_conversation()

    message = respond_to_query("help me reduce spending", expenses, log)

    assert message.tag == "warning"
    assert "₹300" in message.content
    assert "Food" in message.content
    assert "₹36" in message.content
    assert len(log) == 3


@pytest.mark.integration
def test_captured_expense_feeds_the_advisor() -> None:
    expenses = []
    for transcript in ("Spent 250 on groceries", "Paid ₹120 for an uber ride", "bought coffee for 80 rs"):
        result = build_expense_record(transcript, TODAY)
        assert result.ok, transcript
        expenses.append(result.record)

    message = respond_to_query("show me my spending analysis", expenses)

    assert [record.category for record in expenses] == ["Groceries", "Transport", "Food"]
    assert message.tag == "insight"
    assert "₹450" in message.content
    assert "Groceries (₹250)" in message.content
