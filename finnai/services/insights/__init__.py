"""
Insight Provider Services

Abstract provider interface plus the Gemini implementation.
"""

from finnai.services.insights.interface import (
    InsightProvider,
    InsightProviderError,
    ProviderNotConfiguredError,
    UnconfiguredInsightProvider,
)

__all__ = [
    "InsightProvider",
    "InsightProviderError",
    "ProviderNotConfiguredError",
    "UnconfiguredInsightProvider",
]
