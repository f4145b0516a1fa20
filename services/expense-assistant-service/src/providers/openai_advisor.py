"""
OpenAI-powered advisor provider.

Sends the caller's budget status, category breakdown and most recent expenses
to a chat model and wraps the reply as a single recommendation message. Any API
failure or empty completion falls back to the deterministic rule table.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from openai import APIError, APITimeoutError, OpenAI
from shared.observability.privacy import hash_payload

from aggregate_expenses import compute_budget_status
from expense_model import AdvisorMessage
from intent_matcher import get_intent_description
from money import format_amount, format_rupees

if TYPE_CHECKING:
    from advisor_provider import AdvisorProviderRequest, AdvisorProviderResponse

logger = logging.getLogger(__name__)

RECENT_EXPENSE_LIMIT = 5
MAX_CONTENT_LENGTH = 1500

SYSTEM_PROMPT = (
    "You are a helpful financial advisor. Provide practical, encouraging advice in a friendly "
    "tone. Use Indian rupees (₹) in your responses."
)

USER_PROMPT_TEMPLATE = """As a financial advisor, analyze these expense data and provide personalized advice:

User question: "{query}"
Question topic: {topic}

Monthly Budget: {monthly_budget}
Total Spent: {total_spent}
Remaining Budget: {remaining_budget}
Budget Used: {budget_used_pct:.1f}%

Category Breakdown:
{category_section}

Recent Expenses:
{recent_section}

Provide 3-4 specific, actionable financial advice points based on this data. Focus on:
1. Budget management
2. Spending patterns
3. Savings opportunities
4. Category-specific recommendations

Keep the advice concise, practical, and encouraging."""


def _format_category_section(request: AdvisorProviderRequest) -> str:
    if not request.snapshot.category_totals:
        return "No expenses logged yet."
    return "\n".join(
        f"{category}: {format_rupees(amount)}" for category, amount in request.snapshot.category_totals.items()
    )


def _format_recent_section(request: AdvisorProviderRequest) -> str:
    recent = list(request.expenses)[:RECENT_EXPENSE_LIMIT]
    if not recent:
        return "None."
    return "\n".join(
        f"{expense.description} - {format_rupees(expense.amount)} ({expense.category})" for expense in recent
    )


def build_user_prompt(request: AdvisorProviderRequest) -> str:
    status = compute_budget_status(request.snapshot, request.monthly_budget)
    return USER_PROMPT_TEMPLATE.format(
        query=request.query.strip(),
        topic=get_intent_description(request.intent),
        monthly_budget=format_rupees(status.monthly_budget),
        total_spent=format_rupees(status.total_spent),
        remaining_budget=("-" if status.remaining_budget < 0 else "")
        + format_rupees(abs(status.remaining_budget)),
        budget_used_pct=status.budget_used_pct,
        category_section=_format_category_section(request),
        recent_section=_format_recent_section(request),
    )


class OpenAIAdvisorProvider:
    """
    Chat-model-backed advisor.

    Requires settings carrying an OpenAIConfig; falls back to the deterministic
    provider when the API errors, times out or returns no text.
    """

    name = "openai"

    def __init__(self, settings: Any | None = None):
        self._settings = settings
        if settings and settings.openai:
            self._client = OpenAI(
                api_key=settings.openai.api_key,
                base_url=settings.openai.api_base,
                timeout=settings.timeout_seconds,
            )
            self._model = settings.openai.model
            self._temperature = settings.temperature
            self._max_tokens = settings.max_output_tokens
        else:
            self._client = None
            self._model = None
            self._temperature = 0.7
            self._max_tokens = 300

    def generate(self, request: AdvisorProviderRequest) -> AdvisorProviderResponse:
        from advisor_provider import AdvisorProviderResponse, _log_advisor_metrics

        if not self._client:
            raise RuntimeError("OpenAI client not configured. Check OPENAI_API_KEY, OPENAI_MODEL, OPENAI_API_BASE.")

        user_prompt = build_user_prompt(request)
        logger.info(
            {
                "event": "openai_advisor_request",
                "provider": self.name,
                "model": self._model,
                "intent": request.intent,
                "prompt_hash": hash_payload({"system": SYSTEM_PROMPT, "user": user_prompt}),
                "expense_count": len(request.expenses),
            }
        )

        try:
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except (APIError, APITimeoutError) as exc:
            logger.error(
                {
                    "event": "openai_advisor_error",
                    "provider": self.name,
                    "error_type": type(exc).__name__,
                    "error_message": str(exc),
                }
            )
            return self._fallback_to_deterministic(request)

        content = _completion_text(completion)
        if not content:
            logger.warning({"event": "openai_advisor_empty_completion", "provider": self.name})
            return self._fallback_to_deterministic(request)

        message = AdvisorMessage(
            id=uuid4().hex,
            role="assistant",
            content=content[:MAX_CONTENT_LENGTH],
            timestamp=datetime.now(),
            tag="recommendation",
        )
        logger.info(
            {
                "event": "openai_advisor_response",
                "provider": self.name,
                "response_hash": hash_payload(message.content),
                "total_spent": format_amount(request.snapshot.total_spent),
            }
        )
        _log_advisor_metrics(self.name, request, message)
        return AdvisorProviderResponse(message=message)

    def _fallback_to_deterministic(self, request: AdvisorProviderRequest) -> AdvisorProviderResponse:
        from advisor_provider import DeterministicAdvisorProvider

        logger.info({"event": "openai_fallback_to_deterministic", "provider": self.name})
        return DeterministicAdvisorProvider().generate(request)


def _completion_text(completion: Any) -> str:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    content = choices[0].message.content
    return content.strip() if isinstance(content, str) else ""
