"""
Advisor conversation turns.

The conversation log is append-only: messages are never edited or removed here.
A turn appends the user's message and the assistant's answer; a blank query is
a no-op that appends nothing.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Sequence
from uuid import uuid4

from advisor_provider import AdvisorProvider, AdvisorProviderRequest, DeterministicAdvisorProvider
from aggregate_expenses import aggregate_expenses
from expense_model import AdvisorMessage, ExpenseRecord
from intent_matcher import analyze_intent
from shared.provider_settings import DEFAULT_MONTHLY_BUDGET

logger = logging.getLogger(__name__)

GREETING_TEXT = (
    "Hello! I'm your AI financial advisor. I can help you analyze your spending patterns, "
    "set goals, and make smart financial decisions. What would you like to know?"
)


class ConversationLog:
    """Ordered, append-only sequence of advisor messages."""

    def __init__(self, messages: Sequence[AdvisorMessage] = ()) -> None:
        self._messages: list[AdvisorMessage] = list(messages)

    def append(self, message: AdvisorMessage) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> tuple[AdvisorMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[AdvisorMessage]:
        return iter(tuple(self._messages))


def greeting_message(now: datetime | None = None) -> AdvisorMessage:
    return AdvisorMessage(
        id=uuid4().hex,
        role="assistant",
        content=GREETING_TEXT,
        timestamp=now or datetime.now(),
        tag="insight",
    )


def start_conversation(now: datetime | None = None) -> ConversationLog:
    """Open a conversation seeded with the assistant greeting."""
    return ConversationLog([greeting_message(now)])


def user_message(query: str, now: datetime | None = None) -> AdvisorMessage:
    return AdvisorMessage(id=uuid4().hex, role="user", content=query, timestamp=now or datetime.now())


def respond_to_query(
    query: str | None,
    expenses: Sequence[ExpenseRecord],
    log: ConversationLog | None = None,
    provider: AdvisorProvider | None = None,
    *,
    monthly_budget: Decimal = DEFAULT_MONTHLY_BUDGET,
    context: dict | None = None,
) -> AdvisorMessage | None:
    """
    Answer one user query against the caller's expenses.

    Args:
        query: Free-text question; blank or None is treated as empty input.
        expenses: Caller-owned records, aggregated fresh for this turn.
        log: Conversation to append the user and assistant messages to.
        provider: Advisor implementation; deterministic when omitted.
    Returns:
        The assistant message, or None for empty input (nothing is appended).
    """
    if query is None or not query.strip():
        logger.info({"event": "advisor_turn_skipped", "reason": "empty_input"})
        return None

    snapshot = aggregate_expenses(expenses)
    intent_match = analyze_intent(query)
    request = AdvisorProviderRequest(
        query=query,
        intent=intent_match.intent,
        snapshot=snapshot,
        expenses=tuple(expenses),
        monthly_budget=monthly_budget,
        context=dict(context or {}),
    )

    asked = user_message(query)
    response = (provider or DeterministicAdvisorProvider()).generate(request)

    # Both messages or neither.
    if log is not None:
        log.append(asked)
        log.append(response.message)

    logger.info(
        {
            "event": "advisor_turn_completed",
            "intent": intent_match.intent,
            "matched_keyword": intent_match.keyword,
            "tag": response.message.tag,
        }
    )
    return response.message

