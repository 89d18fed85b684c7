"""
Activity Logger

Every significant action in the system is written to a structured local log.

The activity logger:
- Is synchronous; it only writes to the local log
- Gracefully handles failures (never crashes the app if logging fails)
- Keeps NO history: there is nothing to query afterwards
"""

import structlog

from finnai.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self, logger_name: str = "finnai.activity"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: ActivityEvent) -> bool:
        """
        Log an activity event.

        Returns False if the log write failed. Never raises.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == ActivitySeverity.ERROR:
                self._logger.error("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.WARNING:
                self._logger.warning("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.DEBUG:
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception:
            return False

        return True

    def log_account_added(self, account) -> None:
        self.log(ActivityEventBuilder.account_added(
            account_id=account.id,
            name=account.name,
            balance=account.balance,
        ))

    def log_transaction_added(self, transaction) -> None:
        self.log(ActivityEventBuilder.transaction_added(
            transaction_id=transaction.id,
            account_id=transaction.account_id,
            signed_amount=transaction.signed_amount,
            category=transaction.category.value,
        ))

    def log_validation_failed(self, field: str, message: str) -> None:
        self.log(ActivityEventBuilder.validation_failed(field=field, message=message))

    def log_timeframe_changed(self, previous: str, current: str) -> None:
        self.log(ActivityEventBuilder.timeframe_changed(previous=previous, current=current))

    def log_insight_requested(self, generation: int, transaction_count: int) -> None:
        self.log(ActivityEventBuilder.insight_requested(
            generation=generation,
            transaction_count=transaction_count,
        ))

    def log_insight_applied(self, generation: int, source: str, insight_count: int) -> None:
        self.log(ActivityEventBuilder.insight_applied(
            generation=generation,
            source=source,
            insight_count=insight_count,
        ))

    def log_insight_discarded(self, generation: int, latest_generation: int) -> None:
        self.log(ActivityEventBuilder.insight_discarded(
            generation=generation,
            latest_generation=latest_generation,
        ))

    def log_provider_failed(self, error: BaseException) -> None:
        self.log(ActivityEventBuilder.insight_provider_failed(
            error_type=type(error).__name__,
            error_message=str(error),
        ))

    def log_error(self, error_type: str, error_message: str, details: dict = None) -> None:
        self.log(ActivityEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
