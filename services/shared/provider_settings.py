"""
Environment-driven settings for the advisor response provider.

The advisor can answer with the deterministic rule table, a fixture-backed mock,
or an OpenAI chat model. Parsing the selection, the outbound call tuning and the
monthly budget used for budget-status figures in one place keeps the HTTP layer
and the providers free of env handling.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

SUPPORTED_PROVIDERS = frozenset({"deterministic", "mock", "openai"})
REQUIRED_OPENAI_ENV_VARS = ("OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_API_BASE")
DEFAULT_MONTHLY_BUDGET = Decimal("2000")

PROVIDER_ENV = "ADVISOR_PROVIDER"
TIMEOUT_ENV = "ADVISOR_PROVIDER_TIMEOUT_SECONDS"
TEMPERATURE_ENV = "ADVISOR_PROVIDER_TEMPERATURE"
MAX_TOKENS_ENV = "ADVISOR_PROVIDER_MAX_TOKENS"
MONTHLY_BUDGET_ENV = "EXPENSE_MONTHLY_BUDGET"


class ProviderSettingsError(RuntimeError):
    """Raised when advisor configuration cannot be constructed."""


@dataclass(frozen=True, slots=True)
class OpenAIConfig:
    api_key: str
    model: str
    api_base: str


@dataclass(frozen=True, slots=True)
class AdvisorSettings:
    provider_name: str
    timeout_seconds: float
    temperature: float
    max_output_tokens: int
    monthly_budget: Decimal = DEFAULT_MONTHLY_BUDGET
    openai: Optional[OpenAIConfig] = None


def load_advisor_settings(
    *,
    default_provider: str = "deterministic",
    default_timeout: float = 30.0,
    default_temperature: float = 0.7,
    default_max_tokens: int = 300,
    default_monthly_budget: Decimal = DEFAULT_MONTHLY_BUDGET,
) -> AdvisorSettings:
    """
    Construct AdvisorSettings from the process environment.

    Args:
        default_*: Fallback values when the matching env var is unset/empty.
    Raises:
        ProviderSettingsError: when a value cannot be parsed, the provider is
            unknown, or the openai provider is selected without its credentials.
    """

    provider_name = _normalize_provider(os.getenv(PROVIDER_ENV, default_provider))
    timeout_seconds = _parse_float(os.getenv(TIMEOUT_ENV), default_timeout, TIMEOUT_ENV)
    temperature = _parse_float(os.getenv(TEMPERATURE_ENV), default_temperature, TEMPERATURE_ENV)
    max_output_tokens = _parse_int(os.getenv(MAX_TOKENS_ENV), default_max_tokens, MAX_TOKENS_ENV)
    monthly_budget = _parse_budget(os.getenv(MONTHLY_BUDGET_ENV), default_monthly_budget)

    openai_config: Optional[OpenAIConfig] = None
    if provider_name == "openai":
        openai_config = _build_openai_config()

    return AdvisorSettings(
        provider_name=provider_name,
        timeout_seconds=timeout_seconds,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        monthly_budget=monthly_budget,
        openai=openai_config,
    )


def _normalize_provider(raw_value: Optional[str]) -> str:
    candidate = (raw_value or "").strip().lower()
    if not candidate:
        candidate = "deterministic"

    if candidate not in SUPPORTED_PROVIDERS:
        raise ProviderSettingsError(f"Unsupported advisor provider '{candidate}'")
    return candidate


def _parse_float(raw_value: Optional[str], default: float, env_key: str) -> float:
    if raw_value is None or raw_value.strip() == "":
        return default

    try:
        return float(raw_value)
    except ValueError as exc:
        raise ProviderSettingsError(f"{env_key} must be numeric (received '{raw_value}')") from exc


def _parse_int(raw_value: Optional[str], default: int, env_key: str) -> int:
    if raw_value is None or raw_value.strip() == "":
        return default

    try:
        return int(raw_value)
    except ValueError as exc:
        raise ProviderSettingsError(f"{env_key} must be an integer (received '{raw_value}')") from exc


def _parse_budget(raw_value: Optional[str], default: Decimal) -> Decimal:
    if raw_value is None or raw_value.strip() == "":
        return default

    try:
        budget = Decimal(raw_value.strip())
    except InvalidOperation as exc:
        raise ProviderSettingsError(
            f"{MONTHLY_BUDGET_ENV} must be numeric (received '{raw_value}')"
        ) from exc
    if not budget.is_finite() or budget < 0:
        raise ProviderSettingsError(f"{MONTHLY_BUDGET_ENV} must be a non-negative amount")
    return budget


def _build_openai_config() -> OpenAIConfig:
    missing = [env_key for env_key in REQUIRED_OPENAI_ENV_VARS if not os.getenv(env_key)]
    if missing:
        formatted_missing = ", ".join(missing)
        raise ProviderSettingsError(
            f"{PROVIDER_ENV}=openai requires the following env vars: {formatted_missing}"
        )

    return OpenAIConfig(
        api_key=os.environ["OPENAI_API_KEY"].strip(),
        model=os.environ["OPENAI_MODEL"].strip(),
        api_base=os.environ["OPENAI_API_BASE"].strip(),
    )
