"""
Tests for the insight agent.

The provider is always a fake; no real API calls.
"""

import json

import pytest

from conftest import PROVIDER_RESPONSE, FakeProvider, make_agent
from finnai.agents import (
    DEFAULT_FORECAST,
    InsightAgent,
    MalformedResponseError,
    fallback_report,
    placeholder_report,
)
from finnai.ledger import seed_transactions
from finnai.models.insight import InsightType, ReportSource
from finnai.services.insights import InsightProviderError, UnconfiguredInsightProvider
from finnai.services.insights.gemini import build_prompt


class TestRequestBuilding:
    """What the agent sends."""

    def test_payload_has_no_ids(self, fake_provider):
        agent = make_agent(fake_provider)
        request = agent.build_request(seed_transactions())
        payload = request.transactions_payload()

        assert len(payload) == 7
        for row in payload:
            assert set(row) == {"date", "amount", "category", "subCategory", "description", "type"}
        assert payload[0]["date"] == "2023-10-01"
        assert payload[0]["amount"] == 1200.0

    def test_prompt_embeds_history(self, fake_provider):
        request = make_agent(fake_provider).build_request(seed_transactions()[:1])
        prompt = build_prompt(request)
        assert prompt.startswith("Act as an elite wealth manager")
        assert '"subCategory": "Rent"' in prompt
        assert "acc1" not in prompt


class TestParseResponse:
    """Tests for InsightAgent.parse_response."""

    def setup_method(self):
        self.agent = InsightAgent(provider=FakeProvider())

    def test_valid_response(self):
        report = self.agent.parse_response(json.dumps(PROVIDER_RESPONSE))
        assert report.source == ReportSource.PROVIDER
        assert len(report.insights) == 2
        assert report.insights[1].type == InsightType.SAVING_TIP
        assert report.forecast == PROVIDER_RESPONSE["forecast"]

    def test_code_fence_is_tolerated(self):
        text = "```json\n" + json.dumps(PROVIDER_RESPONSE) + "\n```"
        assert len(self.agent.parse_response(text).insights) == 2

    def test_missing_fields_get_defaults(self):
        report = self.agent.parse_response("{}")
        assert report.insights == []
        assert report.forecast == DEFAULT_FORECAST
        assert report.source == ReportSource.PROVIDER

    def test_empty_text_gets_defaults(self):
        report = self.agent.parse_response("")
        assert report.insights == []
        assert report.forecast == DEFAULT_FORECAST

    def test_legacy_predictions_key(self):
        report = self.agent.parse_response(json.dumps({"predictions": "Tight month ahead."}))
        assert report.forecast == "Tight month ahead."

    def test_forecast_preferred_over_predictions(self):
        text = json.dumps({"forecast": "A", "predictions": "B"})
        assert self.agent.parse_response(text).forecast == "A"

    @pytest.mark.parametrize("text", [
        "not json at all",
        "{ broken",
        '{"insights": "many"}',
        '{"insights": [{"title": "x", "description": "y", "type": "rumour"}]}',
        '[{"title": "x", "description": "y", "type": "analysis"}]',
        '```json\n[{"forecast": "Up"}]\n```',
        '"just a string"',
    ])
    def test_malformed_response(self, text):
        with pytest.raises(MalformedResponseError):
            self.agent.parse_response(text)


class TestRequestInsights:
    """Tests for InsightAgent.request_insights."""

    @pytest.mark.asyncio
    async def test_empty_history_skips_provider(self, fake_provider):
        report = await make_agent(fake_provider).request_insights([])
        assert report == placeholder_report()
        assert report.insights[0].title == "No Data Yet"
        assert fake_provider.call_count == 0

    @pytest.mark.asyncio
    async def test_success(self, fake_provider):
        report = await make_agent(fake_provider).request_insights(seed_transactions())
        assert report.source == ReportSource.PROVIDER
        assert fake_provider.call_count == 1
        assert len(fake_provider.requests[0].transactions) == 7

    @pytest.mark.asyncio
    async def test_transport_error_gives_fallback(self):
        provider = FakeProvider([InsightProviderError("connection reset")])
        report = await make_agent(provider).request_insights(seed_transactions())
        assert report == fallback_report()
        assert report.insights[0].title == "Audit Interrupted"
        assert report.forecast == "Prediction unavailable."

    @pytest.mark.asyncio
    async def test_malformed_response_gives_fallback(self):
        provider = FakeProvider(["I think you should save more."])
        report = await make_agent(provider).request_insights(seed_transactions())
        assert report.source == ReportSource.FALLBACK

    @pytest.mark.asyncio
    async def test_unexpected_error_gives_fallback(self):
        provider = FakeProvider([RuntimeError("boom")])
        report = await make_agent(provider, max_attempts=3).request_insights(seed_transactions())
        assert report.source == ReportSource.FALLBACK
        # Only transport errors are retried
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout_gives_fallback(self):
        provider = FakeProvider(delay=1.0)
        agent = make_agent(provider, timeout_seconds=0.05)
        report = await agent.request_insights(seed_transactions())
        assert report.source == ReportSource.FALLBACK

    @pytest.mark.asyncio
    async def test_retry_recovers_from_transport_error(self):
        provider = FakeProvider([
            InsightProviderError("503"),
            json.dumps(PROVIDER_RESPONSE),
        ])
        report = await make_agent(provider, max_attempts=2).request_insights(seed_transactions())
        assert report.source == ReportSource.PROVIDER
        assert provider.call_count == 2

    @pytest.mark.asyncio
    async def test_retries_are_bounded(self):
        provider = FakeProvider([InsightProviderError("down")])
        report = await make_agent(provider, max_attempts=3).request_insights(seed_transactions())
        assert report.source == ReportSource.FALLBACK
        assert provider.call_count == 3

    @pytest.mark.asyncio
    async def test_unconfigured_provider(self):
        agent = make_agent(UnconfiguredInsightProvider())
        report = await agent.request_insights(seed_transactions())
        assert report.source == ReportSource.FALLBACK


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
