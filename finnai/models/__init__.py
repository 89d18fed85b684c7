"""
Data Models Package

This package contains all Pydantic models used in FinnAI.
All data flowing through the system must conform to these schemas.
"""

from finnai.models.ledger import (
    Account,
    AccountType,
    Category,
    NewAccount,
    NewTransaction,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)
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
from finnai.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Ledger models
    "Account",
    "AccountType",
    "Category",
    "NewAccount",
    "NewTransaction",
    "Transaction",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    # Insight models
    "AIInsight",
    "InsightImpact",
    "InsightReport",
    "InsightRequest",
    "InsightType",
    "ProviderResponse",
    "ReportSource",
    "TransactionSummary",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
