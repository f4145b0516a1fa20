"""
Provider abstraction for advisor responses.

Both the deterministic rule table and the optional LLM-backed implementation
accept the same request (query, matched intent, precomputed aggregates and the
caller's expenses) and return one assistant message.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence, runtime_checkable
from uuid import uuid4

from shared.observability.privacy import hash_payload, redact_fields, text_fingerprint
from shared.provider_settings import DEFAULT_MONTHLY_BUDGET

from expense_model import AdvisorMessage, AdvisoryIntent, AggregateSnapshot, ExpenseRecord
from generate_response import generate_response

logger = logging.getLogger(__name__)

SAFE_CONTEXT_KEYS = frozenset({"locale", "surface", "channel"})
VALID_TAGS = frozenset({"insight", "warning", "recommendation", "goal"})


@dataclass(slots=True)
class AdvisorProviderRequest:
    """
    Contract for advisor inputs.

    Attributes:
        query: Raw user question (never logged in clear text).
        intent: Intent already matched for the query.
        snapshot: Aggregates computed from `expenses`.
        expenses: Caller-owned records, most recent first.
        monthly_budget: Budget used for budget-status figures.
        context: Optional metadata (surface, locale, ...).
    """

    query: str
    intent: AdvisoryIntent
    snapshot: AggregateSnapshot
    expenses: Sequence[ExpenseRecord] = field(default_factory=tuple)
    monthly_budget: Decimal = DEFAULT_MONTHLY_BUDGET
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class AdvisorProviderResponse:
    message: AdvisorMessage


@runtime_checkable
class AdvisorProvider(Protocol):
    """
    Interface for swappable advisor implementations.

    Implementations provide a descriptive `name` and a `generate` method.
    """

    name: str

    def generate(self, request: AdvisorProviderRequest) -> AdvisorProviderResponse:
        """Produce the assistant message answering the request."""
        ...


class DeterministicAdvisorProvider:
    """Default provider backed by the fixed intent/aggregate rule table."""

    name = "deterministic"

    def generate(self, request: AdvisorProviderRequest) -> AdvisorProviderResponse:
        message = generate_response(request.intent, request.snapshot)
        _log_advisor_metrics(self.name, request, message)
        return AdvisorProviderResponse(message=message)


class MockAdvisorProvider:
    """
    Fixture-driven provider for demos and tests.

    The fixture maps intents to ``{"content", "tag"}`` entries, with a
    ``"default"`` entry used for intents it does not list.
    """

    name = "mock"

    def __init__(self, fixture_path: str | Path | None = None):
        candidate = fixture_path or os.getenv("ADVISOR_PROVIDER_FIXTURE")
        if candidate is None:
            candidate = _default_fixture_path()

        self._fixture_path = Path(candidate)
        if not self._fixture_path.exists():
            raise FileNotFoundError(f"Mock advisor provider fixture not found at {self._fixture_path}")

    def generate(self, request: AdvisorProviderRequest) -> AdvisorProviderResponse:
        responses = self._load_fixture().get("responses", {})
        entry = responses.get(request.intent) or responses.get("default")
        if entry is None:
            raise ValueError(f"Mock advisor fixture has no entry for '{request.intent}' and no default")

        message = _deserialize_message(entry)
        _log_advisor_metrics(self.name, request, message)
        return AdvisorProviderResponse(message=message)

    def _load_fixture(self) -> Dict[str, Any]:
        try:
            return json.loads(self._fixture_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Mock advisor provider fixture is not valid JSON: {self._fixture_path}") from exc


def _default_fixture_path() -> Path:
    service_root = Path(__file__).resolve().parents[1]
    return service_root / "tests" / "fixtures" / "mock_advisor_responses.json"


def _deserialize_message(item: Dict[str, Any]) -> AdvisorMessage:
    tag = item.get("tag", "insight")
    if tag not in VALID_TAGS:
        raise ValueError(f"Unsupported message tag '{tag}' in mock advisor fixture")
    return AdvisorMessage(
        id=uuid4().hex,
        role="assistant",
        content=str(item["content"]),
        timestamp=datetime.now(),
        tag=tag,
    )


def build_advisor_provider(
    name: str | None,
    *,
    settings: Optional[Any] = None,
) -> AdvisorProvider:
    """
    Factory that instantiates the requested advisor provider implementation.
    """

    normalized = (name or "").strip().lower()
    if normalized in ("", "deterministic"):
        return DeterministicAdvisorProvider()
    if normalized == "mock":
        return MockAdvisorProvider()
    if normalized == "openai":
        # Imported lazily so the openai SDK is only loaded when selected.
        from providers.openai_advisor import OpenAIAdvisorProvider

        return OpenAIAdvisorProvider(settings=settings)

    raise ValueError(f"Unsupported advisor provider '{name}'")


def _log_advisor_metrics(provider_name: str, request: AdvisorProviderRequest, message: AdvisorMessage) -> None:
    logger.info(
        {
            "event": "advisor_provider_output",
            "provider": provider_name,
            "intent": request.intent,
            "tag": message.tag,
            "expense_count": len(request.expenses),
            "query": text_fingerprint(request.query),
            "snapshot_hash": hash_payload(asdict(request.snapshot)),
            "content_hash": hash_payload(message.content),
            "context_snapshot": _safe_context_snapshot(request.context),
        }
    )


def _safe_context_snapshot(context: Dict[str, Any]) -> Dict[str, Any]:
    if not context:
        return {}
    return redact_fields(context, SAFE_CONTEXT_KEYS)
