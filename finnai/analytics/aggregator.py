"""
Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and stateless.
Every figure is recomputed from the ledger on each call; there are no
running totals to invalidate.

SCOPES:
- income, expenses, savings rate, category breakdown: the FILTERED
  transactions (the selected timeframe)
- balance (net worth): ALL accounts, whatever the timeframe.
  Balances are running totals, so this asymmetry is intentional.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable

from pydantic import BaseModel, Field

from finnai.models.ledger import Account, Category, Transaction


ZERO = Decimal("0")


class SummaryStats(BaseModel):
    """Headline numbers for the dashboard."""

    income: Decimal = ZERO
    expenses: Decimal = ZERO
    balance: Decimal = Field(
        default=ZERO,
        description="Sum of all account balances, not timeframe scoped"
    )
    savings_rate: Decimal = Field(
        default=ZERO,
        description="Percent of income retained, one decimal place"
    )

    @property
    def net_flow(self) -> Decimal:
        """Income minus expenses over the window."""
        return self.income - self.expenses


class CategoryTotal(BaseModel):
    """Expense total for one category."""

    category: Category
    amount: Decimal


def savings_rate(income: Decimal, expenses: Decimal) -> Decimal:
    """
    (income - expenses) / income * 100, rounded to one decimal.

    0 when there is no income. Rates too large for the default decimal
    precision are quantized in a wider context instead of raising.
    """
    if income == 0:
        return Decimal("0.0")
    with localcontext() as ctx:
        rate = (income - expenses) / income * 100
        # Integer digits plus the one kept decimal must fit the precision
        ctx.prec = max(ctx.prec, rate.adjusted() + 2)
        return rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def compute_summary(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
) -> SummaryStats:
    """
    Summary statistics.

    Args:
        transactions: The filtered transactions
        accounts: ALL accounts
    """
    income = ZERO
    expenses = ZERO
    for transaction in transactions:
        if transaction.is_income:
            income += transaction.amount
        else:
            expenses += transaction.amount

    balance = sum((account.balance for account in accounts), ZERO)

    return SummaryStats(
        income=income,
        expenses=expenses,
        balance=balance,
        savings_rate=savings_rate(income, expenses),
    )


def category_breakdown(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """
    Expense totals per category.

    Only expense transactions count. Categories appear in order of first
    occurrence; categories without expenses are left out, not zero-filled.
    """
    totals: dict[Category, Decimal] = {}
    for transaction in transactions:
        if not transaction.is_expense:
            continue
        totals[transaction.category] = totals.get(transaction.category, ZERO) + transaction.amount

    return [
        CategoryTotal(category=category, amount=amount)
        for category, amount in totals.items()
    ]


def top_categories(breakdown: Iterable[CategoryTotal], limit: int = 3) -> list[CategoryTotal]:
    """
    Largest expense categories first.

    sorted() is stable, so equal amounts keep their encounter order.
    """
    ranked = sorted(breakdown, key=lambda entry: entry.amount, reverse=True)
    return ranked[:limit]
