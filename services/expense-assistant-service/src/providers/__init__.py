"""Pluggable provider implementations for advisor responses."""

from .openai_advisor import OpenAIAdvisorProvider

__all__ = ["OpenAIAdvisorProvider"]
