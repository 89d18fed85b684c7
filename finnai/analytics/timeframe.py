"""
Timeframe Filtering

Selects the transactions that fall inside the active window.

Comparison is on calendar date components only (year, month, day).
There is no time-of-day and no time zone: a transaction dated today
belongs to "day" regardless of when it was entered.
"""

from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional, Union

from finnai.models.ledger import Transaction


class Timeframe(str, Enum):
    """Filtering window for transactions."""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    def contains(self, day: date, today: date) -> bool:
        """Does `day` fall in this window around `today`?"""
        if self is Timeframe.DAY:
            return day == today
        if self is Timeframe.MONTH:
            return (day.year, day.month) == (today.year, today.month)
        if self is Timeframe.YEAR:
            return day.year == today.year
        return True


def filter_transactions(
    transactions: Iterable[Transaction],
    timeframe: Union[Timeframe, str],
    today: Optional[date] = None,
) -> list[Transaction]:
    """
    Transactions inside the window, in their input order.

    Future-dated transactions are not rejected; they are kept whenever
    they match the window by the same date-component rule.

    Raises:
        ValueError: if timeframe is not a known window name
    """
    timeframe = Timeframe(timeframe)
    today = today or date.today()
    if isinstance(today, datetime):
        today = today.date()
    return [t for t in transactions if timeframe.contains(t.transaction_date, today)]
