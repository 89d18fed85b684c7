"""
Shared fixtures for FinnAI tests.

No real API calls in tests: the AI provider is always a fake.
"""

import asyncio
import json
from datetime import date
from typing import Optional

import pytest

from finnai.agents import InsightAgent
from finnai.ledger import seed_ledger
from finnai.models.insight import InsightRequest
from finnai.orchestrator import DashboardController
from finnai.services.insights import InsightProvider


SEED_TODAY = date(2023, 10, 15)

PROVIDER_RESPONSE = {
    "insights": [
        {
            "title": "Housing dominates",
            "description": "Rent is 78% of your spending this month.",
            "type": "analysis",
            "impact": "negative",
        },
        {
            "title": "Cook at home",
            "description": "Swap one dinner out per week for groceries.",
            "type": "saving_tip",
            "impact": "positive",
        },
    ],
    "forecast": "Expect a surplus of about $1,900 next month.",
}


class FakeProvider(InsightProvider):
    """Records requests and answers with canned text or errors."""

    def __init__(self, responses=None, delay: float = 0.0):
        # Each entry is a str (returned) or an exception (raised)
        self._responses = list(responses or [json.dumps(PROVIDER_RESPONSE)])
        self._delay = delay
        self.requests: list[InsightRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def generate(self, request: InsightRequest) -> str:
        self.requests.append(request)
        if self._delay:
            await asyncio.sleep(self._delay)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, BaseException):
            raise response
        return response


class GatedProvider(InsightProvider):
    """Each call blocks until the test releases it, so completion order is controlled."""

    def __init__(self):
        self.gates: list[asyncio.Future] = []

    async def generate(self, request: InsightRequest) -> str:
        gate = asyncio.get_running_loop().create_future()
        self.gates.append(gate)
        return await gate


def make_agent(provider: InsightProvider, **kwargs) -> InsightAgent:
    kwargs.setdefault("timeout_seconds", 5.0)
    kwargs.setdefault("max_attempts", 1)
    kwargs.setdefault("retry_backoff", 0)
    return InsightAgent(provider=provider, **kwargs)


def make_controller(
    provider: Optional[InsightProvider] = None,
    timeframe: str = "month",
) -> DashboardController:
    return DashboardController(
        store=seed_ledger(),
        insight_agent=make_agent(provider or FakeProvider()),
        timeframe=timeframe,
        clock=lambda: SEED_TODAY,
    )


@pytest.fixture
def store():
    return seed_ledger()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def controller(fake_provider):
    return make_controller(fake_provider)
