"""
Core Ledger Models for FinnAI

These models define the schemas for accounts and transactions.
They are designed to:
1. Enforce type safety at runtime
2. Keep money in Decimal from input to aggregate
3. Stay immutable once built (the store swaps records, it never edits them)

DESIGN DECISION: Raw user input (NewTransaction, NewAccount) is modelled
separately from the records the ledger holds. Input amounts arrive as
strings or floats from the form; only the ledger turns them into Decimals,
after validation.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class AccountType(str, Enum):
    """Kinds of account a user can open."""
    CHECKING = "Checking"
    SAVINGS = "Savings"
    CREDIT_CARD = "Credit Card"
    CASH = "Cash"


class Category(str, Enum):
    """
    Transaction categories.

    INCOME is a category like any other; whether an entry counts as income
    is decided by TransactionType, not by the category.
    """
    HOUSING = "Housing"
    FOOD = "Food"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health"
    UTILITIES = "Utilities"
    OTHER = "Other"
    INCOME = "Income"


class TransactionType(str, Enum):
    """Direction of money for a transaction."""
    EXPENSE = "expense"
    INCOME = "income"

    @property
    def sign(self) -> int:
        """+1 for income, -1 for expense."""
        return 1 if self is TransactionType.INCOME else -1


ACCOUNT_NAME_MAX_LENGTH = 100
SUB_CATEGORY_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 200


# =============================================================================
# LEDGER RECORDS
# =============================================================================

class Account(BaseModel):
    """
    An account holding a running balance.

    The balance is only ever changed by the ledger store applying a
    transaction; the store replaces the record rather than editing it.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=ACCOUNT_NAME_MAX_LENGTH,
        description="Display name"
    )
    type: AccountType = Field(
        default=AccountType.CHECKING,
        description="Kind of account"
    )
    balance: Decimal = Field(
        default=Decimal("0"),
        description="Current signed balance"
    )


class Transaction(BaseModel):
    """
    A single recorded income or expense.

    Immutable once created. The ledger puts new entries in front,
    which matters for display only.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    transaction_date: date = Field(
        ...,
        alias="date",
        description="Calendar date of the transaction"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Non-negative magnitude"
    )
    category: Category
    sub_category: str = Field(
        default="",
        max_length=SUB_CATEGORY_MAX_LENGTH,
        alias="subCategory",
        description="Free-text label, may be empty"
    )
    description: str = Field(
        default="",
        max_length=DESCRIPTION_MAX_LENGTH,
    )
    type: TransactionType
    account_id: str = Field(
        ...,
        min_length=1,
        alias="accountId",
        description="Account this transaction is applied to"
    )

    @property
    def signed_amount(self) -> Decimal:
        """The amount with the sign applied to balances."""
        return self.amount * self.type.sign

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE


# =============================================================================
# USER INPUT
# =============================================================================

RawAmount = Union[Decimal, int, float, str]


class NewTransaction(BaseModel):
    """
    Transaction as entered in the form.

    CRITICAL: amount is NOT validated here. It goes through the ledger's
    validator, which rejects non-numeric and negative values loudly.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    amount: RawAmount
    description: str = ""
    category: Category = Category.FOOD
    sub_category: str = Field(default="", alias="subCategory")
    type: TransactionType = TransactionType.EXPENSE
    account_id: str = Field(..., alias="accountId")
    transaction_date: date = Field(default_factory=date.today, alias="date")


class NewAccount(BaseModel):
    """Account as entered in the form. A missing or unparseable balance opens at 0."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    type: AccountType = AccountType.CHECKING
    balance: Optional[RawAmount] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_numeric', 'negative')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """Result of validating one piece of user input."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        return next(
            (issue for issue in self.issues if issue.severity == "error"),
            None,
        )
