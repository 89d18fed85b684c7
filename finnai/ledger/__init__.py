"""
Ledger Package

In-memory store of accounts and transactions, plus the demo seed state.
"""

from finnai.ledger.errors import (
    DuplicateIdError,
    LedgerError,
    UnknownAccountError,
    ValidationError,
)
from finnai.ledger.seed import seed_accounts, seed_ledger, seed_transactions
from finnai.ledger.store import LedgerSnapshot, LedgerStore, SequentialIdFactory

__all__ = [
    # Store
    "LedgerSnapshot",
    "LedgerStore",
    "SequentialIdFactory",
    # Seed
    "seed_accounts",
    "seed_ledger",
    "seed_transactions",
    # Exceptions
    "DuplicateIdError",
    "LedgerError",
    "UnknownAccountError",
    "ValidationError",
]
