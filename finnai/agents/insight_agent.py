"""
AI Insight Agent for FinnAI

Turns a transaction history into spending insights and a short forecast
using an external AI provider.

CRITICAL BOUNDARIES:

1. WHAT LEAVES THE APP:
   - date, amount, category, subCategory, description, type
   - NEVER transaction ids or account ids

2. WHAT COMES BACK:
   - Must be JSON matching the insight schema
   - Missing fields get safe defaults; anything else malformed is a failure

3. FAILURE:
   - request_insights NEVER raises. Transport errors, timeouts and malformed
     responses all turn into the fixed fallback report.
   - An empty history is not a failure: it gets its own placeholder report
     and the provider is not contacted at all.
"""

import asyncio
import json
from typing import Iterable, Optional

from pydantic import ValidationError as SchemaError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finnai.activity import ActivityLogger
from finnai.models.insight import (
    AIInsight,
    InsightImpact,
    InsightReport,
    InsightRequest,
    InsightType,
    ProviderResponse,
    ReportSource,
    TransactionSummary,
)
from finnai.models.ledger import Transaction
from finnai.services.insights import InsightProvider, InsightProviderError


INSIGHT_INSTRUCTION = """Act as an elite wealth manager and financial AI. Analyze the following data:
1. Highlight hidden spending patterns using categories and subcategories.
2. Give 3 actionable, high-impact saving strategies.
3. Predict the financial outlook for the next month based on this specific history.

Format the output as JSON:
{
  "insights": [
    { "title": "...", "description": "...", "type": "analysis|saving_tip|prediction", "impact": "positive|negative|neutral" }
  ],
  "forecast": "A concise, professional 1-2 sentence forecast."
}"""

DEFAULT_FORECAST = "Outlook stable."


def placeholder_report() -> InsightReport:
    """Report for an empty history: nothing to analyze yet."""
    return InsightReport(
        insights=[
            AIInsight(
                title="No Data Yet",
                description="Add some transactions to get AI-powered financial insights.",
                type=InsightType.ANALYSIS,
                impact=InsightImpact.NEUTRAL,
            )
        ],
        forecast="Once you record some entries, I can forecast your future balances.",
        source=ReportSource.PLACEHOLDER,
    )


def fallback_report() -> InsightReport:
    """Report for any provider failure."""
    return InsightReport(
        insights=[
            AIInsight(
                title="Audit Interrupted",
                description="Our AI analysis service is temporarily offline.",
                type=InsightType.ANALYSIS,
                impact=InsightImpact.NEUTRAL,
            )
        ],
        forecast="Prediction unavailable.",
        source=ReportSource.FALLBACK,
    )


class MalformedResponseError(ValueError):
    """Provider answered, but not with the agreed JSON shape."""
    pass


class InsightAgent:
    """
    Adapter between the ledger and the AI provider.

    RESPONSIBILITIES:
    - Build the provider request from transactions
    - Bound the call with a timeout and retry transport errors
    - Validate and parse the response
    - Substitute the placeholder or fallback report

    The agent keeps no state between calls.
    """

    def __init__(
        self,
        provider: InsightProvider,
        timeout_seconds: float = 20.0,
        max_attempts: int = 2,
        retry_backoff: float = 0.5,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._provider = provider
        self._timeout_seconds = timeout_seconds
        self._max_attempts = max_attempts
        self._retry_backoff = retry_backoff
        self._activity_logger = activity_logger or ActivityLogger()

    def build_request(self, transactions: Iterable[Transaction]) -> InsightRequest:
        """Provider request for the given transactions."""
        return InsightRequest(
            instruction=INSIGHT_INSTRUCTION,
            transactions=[TransactionSummary.from_transaction(t) for t in transactions],
        )

    def parse_response(self, text: Optional[str]) -> InsightReport:
        """
        Parse the provider's raw text into a report.

        Raises:
            MalformedResponseError: if the text is not JSON of the agreed shape
        """
        text = (text or "").strip() or "{}"

        # Tolerate prose or code fences around the JSON object
        start = text.find("{")
        end = text.rfind("}") + 1
        if start < 0 or end <= start:
            raise MalformedResponseError("Response contains no JSON object")

        try:
            data = json.loads(text[start:end])
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

        # Slicing would turn a top-level array into its first element
        if not isinstance(data, dict) or text[:start].rstrip().endswith("["):
            raise MalformedResponseError("Response is not a JSON object")

        try:
            parsed = ProviderResponse.model_validate(data)
        except SchemaError as e:
            raise MalformedResponseError(f"Response does not match schema: {e}") from e

        return InsightReport(
            insights=parsed.insights or [],
            forecast=parsed.forecast or parsed.predictions or DEFAULT_FORECAST,
            source=ReportSource.PROVIDER,
        )

    async def _generate_with_retry(self, request: InsightRequest) -> str:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._retry_backoff, max=4),
            retry=retry_if_exception_type(InsightProviderError),
            reraise=True,
        ):
            with attempt:
                return await self._provider.generate(request)

    async def request_insights(self, transactions: Iterable[Transaction]) -> InsightReport:
        """
        Insights and a forecast for the given transactions.

        Never raises, except when the awaiting task itself is cancelled.
        """
        transactions = list(transactions)
        if not transactions:
            return placeholder_report()

        request = self.build_request(transactions)

        try:
            text = await asyncio.wait_for(
                self._generate_with_retry(request),
                timeout=self._timeout_seconds,
            )
            return self.parse_response(text)
        except asyncio.TimeoutError:
            self._activity_logger.log_provider_failed(
                asyncio.TimeoutError(f"No response within {self._timeout_seconds}s")
            )
        except Exception as e:
            self._activity_logger.log_provider_failed(e)

        return fallback_report()
