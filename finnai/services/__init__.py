"""Services package."""

from finnai.services.insights import (
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
