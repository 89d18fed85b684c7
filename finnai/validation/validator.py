"""
Input Validation

Checks what the user typed before it reaches the ledger.

AMOUNTS:
- Transaction amounts must parse to a finite, non-negative number no
  larger than MAX_AMOUNT. Anything else is an error; nothing is clamped
  or coerced.
- Opening balances of new accounts are lenient: absent or unparseable
  input opens the account at 0.

IMPORTANT: Validation NEVER silently fixes transaction input.
It reports issues and the ledger refuses the transaction.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from finnai.models.ledger import (
    DESCRIPTION_MAX_LENGTH,
    SUB_CATEGORY_MAX_LENGTH,
    NewTransaction,
    RawAmount,
    ValidationIssue,
    ValidationResult,
)


MAX_AMOUNT = Decimal("999999999999.99")


def _to_decimal(raw: Optional[RawAmount]) -> Optional[Decimal]:
    """Parse a raw amount, or None when it is not a finite number."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip().replace(",", "")
        if not text:
            return None
        try:
            value = Decimal(text)
        except (InvalidOperation, ValueError):
            return None
    if not value.is_finite():
        return None
    return value


def parse_amount(raw: Optional[RawAmount]) -> Decimal:
    """
    Parse a transaction amount.

    Raises:
        ValueError: if the amount is not a finite number, is negative
            or exceeds MAX_AMOUNT
    """
    value = _to_decimal(raw)
    if value is None:
        raise ValueError(f"Amount is not a number: {raw!r}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {raw!r}")
    if value > MAX_AMOUNT:
        raise ValueError(f"Amount exceeds {MAX_AMOUNT}: {raw!r}")
    return value


def parse_opening_balance(raw: Optional[RawAmount]) -> Decimal:
    """Parse an account's opening balance; 0 when absent or unparseable."""
    value = _to_decimal(raw)
    return value if value is not None else Decimal("0")


class TransactionValidator:
    """Validates a NewTransaction against the accounts the ledger holds."""

    def validate(
        self,
        data: NewTransaction,
        account_ids: Iterable[str],
        today: Optional[date] = None,
    ) -> ValidationResult:
        issues = []
        today = today or date.today()

        value = _to_decimal(data.amount)
        if value is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_numeric",
                message=f"Amount must be a number (got {data.amount!r})",
                severity="error",
                suggested_fix="Enter the amount as digits, e.g. 42.50",
            ))
        elif value < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="negative",
                message="Amount cannot be negative",
                severity="error",
                suggested_fix="Enter the size of the amount and pick expense or income",
            ))
        elif value > MAX_AMOUNT:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="too_large",
                message=f"Amount cannot exceed {MAX_AMOUNT:,}",
                severity="error",
            ))
        elif value == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="zero",
                message="Amount is zero",
                severity="warning",
            ))

        for field, text, limit in (
            ("description", data.description, DESCRIPTION_MAX_LENGTH),
            ("sub_category", data.sub_category, SUB_CATEGORY_MAX_LENGTH),
        ):
            if len(text) > limit:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="too_long",
                    message=f"{field.replace('_', '-').capitalize()} is limited to {limit} characters",
                    severity="error",
                    suggested_fix="Shorten the text",
                ))

        if data.account_id not in set(account_ids):
            issues.append(ValidationIssue(
                field="account_id",
                issue_type="unknown_account",
                message=f"Account not found: {data.account_id}",
                severity="error",
                suggested_fix="Pick one of your existing accounts",
            ))

        # Future dates are allowed; they only show up once their window is selected
        if data.transaction_date > today:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({data.transaction_date}) is in the future",
                severity="warning",
            ))

        warnings = [issue.message for issue in issues if issue.severity == "warning"]
        is_valid = not any(issue.severity == "error" for issue in issues)

        return ValidationResult(
            is_valid=is_valid,
            issues=issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short message for the form, errors first."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []
        for issue in result.issues:
            if issue.severity == "error":
                lines.append(f"• {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"  {issue.suggested_fix}")
        for warning in result.warnings:
            lines.append(f"• {warning}")

        return "\n".join(lines)
