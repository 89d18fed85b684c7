"""Demo ledger shown on first run."""

from datetime import date
from decimal import Decimal

from finnai.ledger.store import LedgerStore
from finnai.models.ledger import (
    Account,
    AccountType,
    Category,
    Transaction,
    TransactionType,
)


def seed_accounts() -> list[Account]:
    return [
        Account(id="acc1", name="Main Checking", type=AccountType.CHECKING, balance=Decimal("5240")),
        Account(id="acc2", name="Emergency Fund", type=AccountType.SAVINGS, balance=Decimal("12000")),
    ]


def seed_transactions() -> list[Transaction]:
    """The seven starter transactions, oldest first as the demo lists them."""
    rows = [
        ("1", date(2023, 10, 1), "1200", Category.HOUSING, "Rent", "Rent Payment", TransactionType.EXPENSE),
        ("2", date(2023, 10, 2), "45", Category.FOOD, "Groceries", "Grocery Store", TransactionType.EXPENSE),
        ("3", date(2023, 10, 3), "30", Category.TRANSPORT, "Ride Share", "Uber Ride", TransactionType.EXPENSE),
        ("4", date(2023, 10, 4), "120", Category.ENTERTAINMENT, "Music", "Concert Ticket", TransactionType.EXPENSE),
        ("5", date(2023, 10, 5), "3500", Category.INCOME, "Salary", "Monthly Salary", TransactionType.INCOME),
        ("6", date(2023, 10, 6), "65", Category.FOOD, "Dining Out", "Dinner Out", TransactionType.EXPENSE),
        ("7", date(2023, 10, 7), "80", Category.SHOPPING, "Apparel", "New Shoes", TransactionType.EXPENSE),
    ]
    return [
        Transaction(
            id=tx_id,
            transaction_date=tx_date,
            amount=Decimal(amount),
            category=category,
            sub_category=sub_category,
            description=description,
            type=tx_type,
            account_id="acc1",
        )
        for tx_id, tx_date, amount, category, sub_category, description, tx_type in rows
    ]


def seed_ledger() -> LedgerStore:
    """
    Ledger holding the demo accounts and transactions.

    The seed balances already include the seed transactions.
    """
    return LedgerStore(accounts=seed_accounts(), transactions=seed_transactions())
