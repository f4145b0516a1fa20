"""Tests for shared.provider_settings - env-driven advisor configuration."""

from decimal import Decimal

import pytest
from shared.provider_settings import (
    DEFAULT_MONTHLY_BUDGET,
    ProviderSettingsError,
    load_advisor_settings,
)

ENV_KEYS = (
    "ADVISOR_PROVIDER",
    "ADVISOR_PROVIDER_TIMEOUT_SECONDS",
    "ADVISOR_PROVIDER_TEMPERATURE",
    "ADVISOR_PROVIDER_MAX_TOKENS",
    "EXPENSE_MONTHLY_BUDGET",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_API_BASE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    settings = load_advisor_settings()

    assert settings.provider_name == "deterministic"
    assert settings.timeout_seconds == pytest.approx(30.0)
    assert settings.temperature == pytest.approx(0.7)
    assert settings.max_output_tokens == 300
    assert settings.monthly_budget == DEFAULT_MONTHLY_BUDGET
    assert settings.openai is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ADVISOR_PROVIDER", " MOCK ")
    monkeypatch.setenv("ADVISOR_PROVIDER_MAX_TOKENS", "512")
    monkeypatch.setenv("EXPENSE_MONTHLY_BUDGET", "3500.50")

    settings = load_advisor_settings()

    assert settings.provider_name == "mock"
    assert settings.max_output_tokens == 512
    assert settings.monthly_budget == Decimal("3500.50")


def test_unknown_provider(monkeypatch):
    monkeypatch.setenv("ADVISOR_PROVIDER", "astrologer")

    with pytest.raises(ProviderSettingsError):
        load_advisor_settings()


@pytest.mark.parametrize(
    "key, value",
    [
        ("ADVISOR_PROVIDER_TIMEOUT_SECONDS", "soon"),
        ("ADVISOR_PROVIDER_MAX_TOKENS", "3.5"),
        ("EXPENSE_MONTHLY_BUDGET", "lots"),
        ("EXPENSE_MONTHLY_BUDGET", "-10"),
    ],
)
def test_invalid_values(monkeypatch, key, value):
    monkeypatch.setenv(key, value)

    with pytest.raises(ProviderSettingsError):
        load_advisor_settings()


def test_openai_requires_credentials(monkeypatch):
    monkeypatch.setenv("ADVISOR_PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", "key")

    with pytest.raises(ProviderSettingsError, match="OPENAI_MODEL, OPENAI_API_BASE"):
        load_advisor_settings()


def test_openai_config(monkeypatch):
    monkeypatch.setenv("ADVISOR_PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", " key ")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("OPENAI_API_BASE", "https://api.openai.com/v1")

    settings = load_advisor_settings()

    assert settings.openai.api_key == "key"
    assert settings.openai.model == "gpt-4o-mini"
