"""Exceptions raised at the ledger boundary."""

from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationError(LedgerError):
    """User input was rejected before touching the ledger."""

    def __init__(self, field: str, message: str, issues: Optional[list] = None):
        self.field = field
        self.issues = issues or []
        super().__init__(message)


class UnknownAccountError(LedgerError):
    """A transaction referenced an account the ledger does not hold."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class DuplicateIdError(LedgerError):
    """Attempted to insert a record whose id is already taken."""
    pass
