"""
Main Orchestrator for FinnAI

The DashboardController is the single owner of application state:
- the ledger (through the LedgerStore)
- the selected timeframe
- the last applied insight report

Derived views (filtered transactions, summary, category breakdown) are
recomputed from the ledger on every read. Nothing derived is cached.

INSIGHT REQUESTS:
Every request is tagged with a generation number when it is ISSUED.
When a response resolves, it is applied only if its generation is still
the newest one; otherwise it is discarded. This holds whatever order the
responses arrive in.
"""

from datetime import date
from typing import Callable, Optional, Union

from finnai.activity import ActivityLogger
from finnai.agents import InsightAgent
from finnai.analytics import (
    CategoryTotal,
    SummaryStats,
    Timeframe,
    category_breakdown,
    compute_summary,
    filter_transactions,
    top_categories,
)
from finnai.config import Settings, get_settings
from finnai.ledger import LedgerError, LedgerStore, seed_ledger
from finnai.models.insight import InsightReport
from finnai.models.ledger import Account, NewAccount, NewTransaction, Transaction
from finnai.services.insights import InsightProvider, UnconfiguredInsightProvider
from finnai.services.insights.gemini import GeminiInsightProvider


class DashboardController:
    """
    Owns the dashboard state and the operations that change it.

    All ledger mutations and reads are synchronous. Only the insight
    refresh awaits, and it never blocks a mutation.
    """

    def __init__(
        self,
        store: LedgerStore,
        insight_agent: InsightAgent,
        timeframe: Union[Timeframe, str] = Timeframe.MONTH,
        clock: Callable[[], date] = date.today,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._store = store
        self._insight_agent = insight_agent
        self._timeframe = Timeframe(timeframe)
        self._clock = clock
        self._activity_logger = activity_logger or ActivityLogger()

        self._insights: Optional[InsightReport] = None
        self._generation = 0
        self._resolved_generation = 0
        self._requested_key: Optional[tuple] = None

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def store(self) -> LedgerStore:
        return self._store

    @property
    def timeframe(self) -> Timeframe:
        return self._timeframe

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self._store.accounts

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._store.transactions

    @property
    def insights(self) -> Optional[InsightReport]:
        """Last applied insight report, None before the first one resolves."""
        return self._insights

    @property
    def generation(self) -> int:
        """Generation of the most recently issued insight request."""
        return self._generation

    @property
    def is_loading(self) -> bool:
        """True while the newest insight request is in flight."""
        return self._generation > self._resolved_generation

    @property
    def insights_stale(self) -> bool:
        """Has the filtered set changed since the last request was issued?"""
        return self._filtered_key() != self._requested_key

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def add_transaction(self, data: NewTransaction) -> Transaction:
        """
        Record a transaction.

        Raises:
            ValidationError, UnknownAccountError: input rejected, ledger untouched
        """
        try:
            transaction = self._store.add_transaction(data)
        except LedgerError as e:
            self._activity_logger.log_validation_failed(
                field=getattr(e, "field", "account_id"),
                message=str(e),
            )
            raise

        self._activity_logger.log_transaction_added(transaction)
        return transaction

    def add_account(self, data: NewAccount) -> Account:
        """
        Open an account.

        Raises:
            ValidationError: the name is empty
        """
        try:
            account = self._store.add_account(data)
        except LedgerError as e:
            self._activity_logger.log_validation_failed(
                field=getattr(e, "field", "name"),
                message=str(e),
            )
            raise

        self._activity_logger.log_account_added(account)
        return account

    def set_timeframe(self, timeframe: Union[Timeframe, str]) -> Timeframe:
        """
        Select the filtering window.

        Raises:
            ValueError: unknown timeframe name
        """
        timeframe = Timeframe(timeframe)
        if timeframe != self._timeframe:
            self._activity_logger.log_timeframe_changed(
                previous=self._timeframe.value,
                current=timeframe.value,
            )
            self._timeframe = timeframe
        return timeframe

    # =========================================================================
    # DERIVED VIEWS (recomputed on every call)
    # =========================================================================

    def today(self) -> date:
        return self._clock()

    def filtered_transactions(self) -> list[Transaction]:
        return filter_transactions(self._store.transactions, self._timeframe, self.today())

    def summary(self) -> SummaryStats:
        accounts, transactions = self._store.snapshot()
        filtered = filter_transactions(transactions, self._timeframe, self.today())
        return compute_summary(filtered, accounts)

    def category_breakdown(self) -> list[CategoryTotal]:
        return category_breakdown(self.filtered_transactions())

    def top_categories(self, limit: int = 3) -> list[CategoryTotal]:
        return top_categories(self.category_breakdown(), limit=limit)

    def _filtered_key(self) -> tuple:
        return tuple(t.id for t in self.filtered_transactions())

    # =========================================================================
    # INSIGHTS
    # =========================================================================

    def _issue_request(self) -> tuple[int, list[Transaction]]:
        """Tag a new request and snapshot what it will analyze."""
        self._generation += 1
        transactions = self.filtered_transactions()
        self._requested_key = tuple(t.id for t in transactions)
        self._activity_logger.log_insight_requested(
            generation=self._generation,
            transaction_count=len(transactions),
        )
        return self._generation, transactions

    async def _resolve_request(
        self,
        generation: int,
        transactions: list[Transaction],
    ) -> Optional[InsightReport]:
        try:
            report = await self._insight_agent.request_insights(transactions)
        finally:
            # Settles is_loading for the newest request even when it is cancelled
            if generation == self._generation:
                self._resolved_generation = generation

        if generation != self._generation:
            self._activity_logger.log_insight_discarded(
                generation=generation,
                latest_generation=self._generation,
            )
            return None

        self._insights = report
        self._activity_logger.log_insight_applied(
            generation=generation,
            source=report.source.value,
            insight_count=len(report.insights),
        )
        return report

    async def refresh_insights(self) -> Optional[InsightReport]:
        """
        Request insights for the current filtered set.

        Returns:
            The applied report, or None if a newer request was issued
            while this one was in flight.
        """
        generation, transactions = self._issue_request()
        return await self._resolve_request(generation, transactions)


def create_insight_agent(
    settings: Optional[Settings] = None,
    use_gemini: bool = True,
    activity_logger: Optional[ActivityLogger] = None,
) -> InsightAgent:
    """
    Build the insight agent from settings.

    Falls back to an unconfigured provider (every request gets the
    fallback report) when Gemini is disabled or not configured.
    """
    settings = settings or get_settings()
    activity_logger = activity_logger or ActivityLogger()
    insight_settings = settings.insights

    provider: InsightProvider
    if not use_gemini or not insight_settings.enabled:
        provider = UnconfiguredInsightProvider("AI insights are disabled")
    else:
        try:
            provider = GeminiInsightProvider(settings.gemini)
        except Exception as e:
            # Gemini not configured - continue without it
            activity_logger.log_error(
                error_type="provider_not_configured",
                error_message=str(e),
            )
            provider = UnconfiguredInsightProvider(f"Gemini is not configured: {e}")

    return InsightAgent(
        provider=provider,
        timeout_seconds=insight_settings.timeout_seconds,
        max_attempts=insight_settings.max_attempts,
        activity_logger=activity_logger,
    )


def create_app_components(
    use_gemini: bool = True,
    settings: Optional[Settings] = None,
) -> DashboardController:
    """
    Factory function to create the dashboard controller.

    Args:
        use_gemini: Whether to contact Gemini for insights.
                    Set to False to run fully offline.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    activity_logger = ActivityLogger()

    store = seed_ledger() if app_settings.seed_demo_data else LedgerStore()
    agent = create_insight_agent(
        settings=settings,
        use_gemini=use_gemini,
        activity_logger=activity_logger,
    )

    return DashboardController(
        store=store,
        insight_agent=agent,
        timeframe=app_settings.default_timeframe,
        activity_logger=activity_logger,
    )
