"""
Insight Models for FinnAI

Typed contract between the dashboard and the external AI provider.

REQUEST:  instruction + list of TransactionSummary
RESPONSE: list of AIInsight + forecast string

CRITICAL: TransactionSummary is the ONLY view of a transaction the provider
gets. Internal identifiers (transaction id, account id) never leave the app.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finnai.models.ledger import Category, Transaction, TransactionType


class InsightType(str, Enum):
    """Kind of finding the provider reports."""
    ANALYSIS = "analysis"
    SAVING_TIP = "saving_tip"
    PREDICTION = "prediction"


class InsightImpact(str, Enum):
    """Whether a finding is good or bad news for the user."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class ReportSource(str, Enum):
    """Where an InsightReport came from."""
    PROVIDER = "provider"        # Parsed from a provider response
    PLACEHOLDER = "placeholder"  # Nothing to analyze yet
    FALLBACK = "fallback"        # Provider failed, fixed copy


class AIInsight(BaseModel):
    """A single structured finding."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=2000)
    type: InsightType
    impact: Optional[InsightImpact] = None


class InsightReport(BaseModel):
    """
    Result of one analysis run.

    Replaced wholesale on each run; never merged with a previous report.
    """

    insights: list[AIInsight] = Field(default_factory=list)
    forecast: str
    source: ReportSource = ReportSource.PROVIDER


class TransactionSummary(BaseModel):
    """What the provider sees of a transaction."""
    model_config = ConfigDict(populate_by_name=True)

    date: str
    amount: float
    category: Category
    sub_category: str = Field(default="", serialization_alias="subCategory")
    description: str = ""
    type: TransactionType

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionSummary":
        return cls(
            date=transaction.transaction_date.isoformat(),
            amount=float(transaction.amount),
            category=transaction.category,
            sub_category=transaction.sub_category,
            description=transaction.description,
            type=transaction.type,
        )


class InsightRequest(BaseModel):
    """Provider request: fixed instruction plus the transaction history."""

    instruction: str
    transactions: list[TransactionSummary] = Field(default_factory=list)

    def transactions_payload(self) -> list[dict]:
        """Transactions as plain JSON-ready dicts, in wire field names."""
        return [
            summary.model_dump(mode="json", by_alias=True)
            for summary in self.transactions
        ]


class ProviderResponse(BaseModel):
    """
    Shape the provider is asked to return.

    Both fields are optional here; the agent fills safe defaults
    when the JSON parses but a field is missing.
    """
    model_config = ConfigDict(extra="ignore")

    insights: Optional[list[AIInsight]] = None
    forecast: Optional[str] = None
    # Older prompts called this field "predictions"
    predictions: Optional[str] = None
