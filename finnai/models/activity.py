"""
Activity Event Models for FinnAI

Significant actions are described as typed events and written to the
structured log. Events are NOT stored: there is no history of edits,
only a local log for debugging and observability.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Ledger
    ACCOUNT_ADDED = "account_added"
    TRANSACTION_ADDED = "transaction_added"
    VALIDATION_FAILED = "validation_failed"

    # Dashboard
    TIMEFRAME_CHANGED = "timeframe_changed"

    # Insights
    INSIGHT_REQUESTED = "insight_requested"
    INSIGHT_APPLIED = "insight_applied"
    INSIGHT_DISCARDED = "insight_discarded"
    INSIGHT_PROVIDER_FAILED = "insight_provider_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEvent(BaseModel):
    """A single activity event."""

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'account', 'transaction', 'insight')"
    )
    entity_id: Optional[str] = None

    # Insight requests carry their generation so late responses can be traced
    generation: Optional[int] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "generation": self.generation,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.account_added(account_id, name, balance)
        event = ActivityEventBuilder.insight_discarded(generation, latest)
    """

    @staticmethod
    def account_added(
        account_id: str,
        name: str,
        balance: Decimal,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.ACCOUNT_ADDED,
            entity_type="account",
            entity_id=account_id,
            description=f"Account opened: {name}",
            details={"opening_balance": str(balance)},
            is_user_action=True,
        )

    @staticmethod
    def transaction_added(
        transaction_id: str,
        account_id: str,
        signed_amount: Decimal,
        category: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction recorded in {category}",
            details={
                "account_id": account_id,
                "signed_amount": str(signed_amount),
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        field: str,
        message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.VALIDATION_FAILED,
            severity=ActivitySeverity.WARNING,
            entity_type="transaction",
            description=f"Input rejected: {field}",
            details={"field": field},
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def timeframe_changed(
        previous: str,
        current: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TIMEFRAME_CHANGED,
            entity_type="dashboard",
            description=f"Timeframe changed from {previous} to {current}",
            details={"previous": previous, "current": current},
            is_user_action=True,
        )

    @staticmethod
    def insight_requested(
        generation: int,
        transaction_count: int,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INSIGHT_REQUESTED,
            severity=ActivitySeverity.DEBUG,
            entity_type="insight",
            generation=generation,
            description=f"Insight request #{generation} issued",
            details={"transaction_count": transaction_count},
        )

    @staticmethod
    def insight_applied(
        generation: int,
        source: str,
        insight_count: int,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INSIGHT_APPLIED,
            entity_type="insight",
            generation=generation,
            description=f"Insight report #{generation} applied ({source})",
            details={"source": source, "insight_count": insight_count},
        )

    @staticmethod
    def insight_discarded(
        generation: int,
        latest_generation: int,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INSIGHT_DISCARDED,
            severity=ActivitySeverity.DEBUG,
            entity_type="insight",
            generation=generation,
            description=f"Stale insight report #{generation} discarded",
            details={"latest_generation": latest_generation},
        )

    @staticmethod
    def insight_provider_failed(
        error_type: str,
        error_message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INSIGHT_PROVIDER_FAILED,
            severity=ActivitySeverity.WARNING,
            entity_type="insight",
            description=f"Insight provider failed: {error_type}",
            details={"error_type": error_type},
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SYSTEM_ERROR,
            severity=ActivitySeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
