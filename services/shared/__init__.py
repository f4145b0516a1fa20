"""
Shared utilities for the expense assistant services.

This package contains code shared across service modules:
- provider_settings: Environment-driven configuration for the advisor provider
- observability: Telemetry, JSON logging, and privacy utilities
"""

from .provider_settings import (
    DEFAULT_MONTHLY_BUDGET,
    REQUIRED_OPENAI_ENV_VARS,
    SUPPORTED_PROVIDERS,
    AdvisorSettings,
    OpenAIConfig,
    ProviderSettingsError,
    load_advisor_settings,
)

__all__ = [
    "DEFAULT_MONTHLY_BUDGET",
    "REQUIRED_OPENAI_ENV_VARS",
    "SUPPORTED_PROVIDERS",
    "AdvisorSettings",
    "OpenAIConfig",
    "ProviderSettingsError",
    "load_advisor_settings",
]
