from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable
from uuid import uuid4

from expense_model import AdvisorMessage, AdvisoryIntent, AggregateSnapshot, MessageTag
from money import format_rupees, round_half_up

SUGGESTED_BUDGET_FACTOR = Decimal("1.2")
SUGGESTED_SAVINGS_FACTOR = Decimal("0.4")
SUGGESTED_INVESTMENT_FACTOR = Decimal("0.3")
REDUCTION_SAVING_FACTOR = Decimal("0.12")
REDUCTION_WARNING_THRESHOLD = Decimal("200")

NO_EXPENSES_TEXT = (
    "I don't see any expenses logged yet. Start tracking your spending with voice input "
    "to get personalized insights!"
)
GOAL_PLAN_TEXT = (
    "Let's set up a savings goal! For a ₹8,00,000 emergency fund, you'd need to save "
    "₹66,667 monthly for 12 months. I can help you track progress and adjust your "
    "spending accordingly."
)
SPENDING_REASONABLE_TEXT = (
    "Your spending seems reasonable. Focus on increasing income sources or small daily "
    "savings like brewing coffee at home instead of buying it."
)
CAPABILITIES_TEXT = (
    "I can help you with spending analysis, budget planning, savings goals, and investment "
    'advice. Try asking me about "my spending analysis" or "how to save more money"!'
)

MessageIdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def render_advice(intent: AdvisoryIntent, snapshot: AggregateSnapshot) -> tuple[str, MessageTag]:
    """
    Map an intent and the current aggregates onto advice text and a tag.

    This table is the whole decision surface of the deterministic advisor;
    numbers are rounded half-up to whole rupees.
    """
    total = snapshot.total_spent

    if intent == "spending_analysis":
        if total > 0:
            top_amount = snapshot.top_category_amount or Decimal("0")
            return (
                f"Based on your recent expenses of {format_rupees(total)}, I notice you spend most on "
                f"{snapshot.top_category or 'various categories'} ({format_rupees(top_amount)}). "
                f"Consider setting a monthly budget of "
                f"{format_rupees(round_half_up(total * SUGGESTED_BUDGET_FACTOR))} to allow for some "
                "flexibility while maintaining control.",
                "insight",
            )
        return NO_EXPENSES_TEXT, "insight"

    if intent == "savings_budget":
        return (
            "To improve your savings, try the 50/30/20 rule: 50% for needs, 30% for wants, 20% for "
            f"savings. Based on your current spending of {format_rupees(total)}, aim to save at least "
            f"{format_rupees(round_half_up(total * SUGGESTED_SAVINGS_FACTOR))} monthly.",
            "recommendation",
        )

    if intent == "goal_planning":
        return GOAL_PLAN_TEXT, "goal"

    if intent == "investment":
        return (
            "Consider starting a SIP (Systematic Investment Plan) with ₹15,000-40,000 monthly. Based on "
            "your spending patterns, you could potentially invest "
            f"{format_rupees(round_half_up(total * SUGGESTED_INVESTMENT_FACTOR))} per month in "
            "diversified mutual funds for long-term wealth creation.",
            "recommendation",
        )

    if intent == "expense_reduction":
        top_amount = snapshot.top_category_amount
        if top_amount is not None and top_amount > REDUCTION_WARNING_THRESHOLD:
            return (
                f"I notice you're spending {format_rupees(top_amount)} on {snapshot.top_category}. "
                "Try reducing this by 10-15% by finding alternatives or planning ahead. This could save "
                f"you {format_rupees(round_half_up(top_amount * REDUCTION_SAVING_FACTOR))} monthly!",
                "warning",
            )
        return SPENDING_REASONABLE_TEXT, "insight"

    return CAPABILITIES_TEXT, "insight"


def generate_response(
    intent: AdvisoryIntent,
    snapshot: AggregateSnapshot,
    *,
    id_factory: MessageIdFactory | None = None,
    clock: Clock | None = None,
) -> AdvisorMessage:
    """
    Build the assistant message for an intent.

    Content and tag depend only on (intent, snapshot); the id and timestamp come
    from the injected factories (uuid4 / now by default).
    """
    content, tag = render_advice(intent, snapshot)
    return AdvisorMessage(
        id=(id_factory or _new_message_id)(),
        role="assistant",
        content=content,
        timestamp=(clock or datetime.now)(),
        tag=tag,
    )


def _new_message_id() -> str:
    return uuid4().hex
