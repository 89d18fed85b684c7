"""Input validation package."""

from finnai.validation.validator import (
    MAX_AMOUNT,
    TransactionValidator,
    parse_amount,
    parse_opening_balance,
)

__all__ = [
    "MAX_AMOUNT",
    "TransactionValidator",
    "parse_amount",
    "parse_opening_balance",
]
