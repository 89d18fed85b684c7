"""Analytics package: timeframe filtering and aggregation."""

from finnai.analytics.aggregator import (
    CategoryTotal,
    SummaryStats,
    category_breakdown,
    compute_summary,
    savings_rate,
    top_categories,
)
from finnai.analytics.timeframe import Timeframe, filter_transactions

__all__ = [
    "CategoryTotal",
    "SummaryStats",
    "Timeframe",
    "category_breakdown",
    "compute_summary",
    "filter_transactions",
    "savings_rate",
    "top_categories",
]
