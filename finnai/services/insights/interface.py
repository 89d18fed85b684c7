"""
Abstract Insight Provider Interface

DESIGN DECISION: The AI service sits behind an abstract interface.
The agent only knows it can send an InsightRequest and get raw text back.
Swapping Gemini for another model, or for a fake in tests, touches
nothing else.
"""

from abc import ABC, abstractmethod

from finnai.models.insight import InsightRequest


class InsightProvider(ABC):
    """
    Abstract interface for an external insight service.

    Implementations perform the transport only. Parsing and validating
    the response is the agent's job.
    """

    @abstractmethod
    async def generate(self, request: InsightRequest) -> str:
        """
        Send a request to the provider.

        Args:
            request: Instruction plus the transaction history

        Returns:
            The raw response text, expected to be JSON

        Raises:
            InsightProviderError: If the call fails
        """
        pass


class InsightProviderError(Exception):
    """Base exception for provider transport failures."""
    pass


class ProviderNotConfiguredError(InsightProviderError):
    """No provider credentials are available."""
    pass


class UnconfiguredInsightProvider(InsightProvider):
    """Stand-in used when no AI provider is configured. Every call fails."""

    def __init__(self, reason: str = "AI provider is not configured"):
        self._reason = reason

    async def generate(self, request: InsightRequest) -> str:
        raise ProviderNotConfiguredError(self._reason)
