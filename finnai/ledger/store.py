"""
In-Memory Ledger Store

The single source of truth for accounts and transactions.

GUARANTEES:
- New transactions are prepended; accounts are appended
- Adding a transaction and adjusting its account's balance are published
  together in ONE state swap; no reader sees one without the other
- Every account's balance equals its opening balance plus the signed sum
  of the transactions that reference it, after every mutation

Only append operations exist. There is no update or delete.
"""

from decimal import Decimal
from itertools import count
from typing import Callable, Iterable, NamedTuple, Optional

from finnai.ledger.errors import DuplicateIdError, UnknownAccountError, ValidationError
from finnai.models.ledger import (
    ACCOUNT_NAME_MAX_LENGTH,
    Account,
    NewAccount,
    NewTransaction,
    Transaction,
)
from finnai.validation import TransactionValidator, parse_amount, parse_opening_balance


class SequentialIdFactory:
    """
    Monotonic id generator.

    Ids are unique per factory instance: "<prefix><n>" with n counting up
    from `start`.
    """

    def __init__(self, prefix: str = "", start: int = 1):
        self._prefix = prefix
        self._counter = count(start)

    def __call__(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


class LedgerSnapshot(NamedTuple):
    """Consistent view of the ledger at one point in time."""

    accounts: tuple[Account, ...]
    transactions: tuple[Transaction, ...]


class LedgerStore:
    """
    Holds accounts and transactions in memory.

    Records are immutable; a mutation builds new records and swaps the
    whole snapshot.
    """

    def __init__(
        self,
        accounts: Optional[Iterable[Account]] = None,
        transactions: Optional[Iterable[Transaction]] = None,
        account_id_factory: Optional[Callable[[], str]] = None,
        transaction_id_factory: Optional[Callable[[], str]] = None,
        validator: Optional[TransactionValidator] = None,
    ):
        """
        Initialize the store.

        Args:
            accounts: Starting accounts. Their balances are taken as CURRENT,
                     i.e. the given transactions are already reflected in them.
            transactions: Starting transactions in display order. New
                          transactions are put in front of them.
            account_id_factory: Id generator for new accounts.
            transaction_id_factory: Id generator for new transactions.
        """
        accounts = tuple(accounts or ())
        transactions = tuple(transactions or ())

        self._check_unique(a.id for a in accounts)
        self._check_unique(t.id for t in transactions)

        account_ids = {a.id for a in accounts}
        for transaction in transactions:
            if transaction.account_id not in account_ids:
                raise UnknownAccountError(transaction.account_id)

        self._state = LedgerSnapshot(accounts, transactions)
        self._new_account_id = account_id_factory or SequentialIdFactory("acc-")
        self._new_transaction_id = transaction_id_factory or SequentialIdFactory("tx-")
        self._validator = validator or TransactionValidator()

        # Opening balances, derived so the invariant holds over the starting state
        self._opening_balances: dict[str, Decimal] = {
            account.id: account.balance - self._signed_total(account.id, transactions)
            for account in accounts
        }

    @staticmethod
    def _check_unique(ids: Iterable[str]) -> None:
        seen = set()
        for record_id in ids:
            if record_id in seen:
                raise DuplicateIdError(f"Duplicate id: {record_id}")
            seen.add(record_id)

    @staticmethod
    def _signed_total(account_id: str, transactions: Iterable[Transaction]) -> Decimal:
        return sum(
            (t.signed_amount for t in transactions if t.account_id == account_id),
            Decimal("0"),
        )

    def _fresh_id(self, factory: Callable[[], str], taken: set[str]) -> str:
        # Skip ids already taken by records that did not come from this factory
        record_id = factory()
        while record_id in taken:
            record_id = factory()
        return record_id

    # =========================================================================
    # READ
    # =========================================================================

    def snapshot(self) -> LedgerSnapshot:
        """Accounts and transactions as one consistent pair."""
        return self._state

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self._state.accounts

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._state.transactions

    def get_account(self, account_id: str) -> Optional[Account]:
        return next((a for a in self._state.accounts if a.id == account_id), None)

    def initial_balance(self, account_id: str) -> Decimal:
        """
        Opening balance of an account.

        Raises:
            UnknownAccountError: if the account does not exist
        """
        if account_id not in self._opening_balances:
            raise UnknownAccountError(account_id)
        return self._opening_balances[account_id]

    def check_balance_invariant(self) -> bool:
        """Recompute every balance from its opening balance and transactions."""
        accounts, transactions = self._state
        return all(
            account.balance
            == self._opening_balances[account.id] + self._signed_total(account.id, transactions)
            for account in accounts
        )

    # =========================================================================
    # WRITE
    # =========================================================================

    def add_account(self, data: NewAccount) -> Account:
        """
        Open a new account.

        A missing or unparseable opening balance is taken as 0.

        Raises:
            ValidationError: if the name is empty or too long
        """
        if not data.name:
            raise ValidationError("name", "Account name is required")
        if len(data.name) > ACCOUNT_NAME_MAX_LENGTH:
            raise ValidationError(
                "name",
                f"Account name is limited to {ACCOUNT_NAME_MAX_LENGTH} characters",
            )

        accounts, transactions = self._state
        account = Account(
            id=self._fresh_id(self._new_account_id, {a.id for a in accounts}),
            name=data.name,
            type=data.type,
            balance=parse_opening_balance(data.balance),
        )

        self._opening_balances[account.id] = account.balance
        self._state = LedgerSnapshot(accounts + (account,), transactions)
        return account

    def add_transaction(self, data: NewTransaction) -> Transaction:
        """
        Record a transaction and apply it to its account.

        Raises:
            UnknownAccountError: if the account does not exist
            ValidationError: if the amount is not a number in range or a
                text field is too long
        """
        accounts, transactions = self._state
        account = next((a for a in accounts if a.id == data.account_id), None)
        if account is None:
            raise UnknownAccountError(data.account_id)

        result = self._validator.validate(data, [a.id for a in accounts])
        if not result.is_valid:
            issue = result.first_error
            raise ValidationError(issue.field, issue.message, result.issues)

        transaction = Transaction(
            id=self._fresh_id(self._new_transaction_id, {t.id for t in transactions}),
            transaction_date=data.transaction_date,
            amount=parse_amount(data.amount),
            category=data.category,
            sub_category=data.sub_category,
            description=data.description,
            type=data.type,
            account_id=account.id,
        )
        updated = account.model_copy(
            update={"balance": account.balance + transaction.signed_amount}
        )

        self._state = LedgerSnapshot(
            tuple(updated if a.id == account.id else a for a in accounts),
            (transaction,) + transactions,
        )
        return transaction
