"""Tests for the in-memory ledger store."""

import random
from datetime import date
from decimal import Decimal

import pytest

from finnai.ledger import (
    DuplicateIdError,
    LedgerStore,
    SequentialIdFactory,
    UnknownAccountError,
    ValidationError,
    seed_accounts,
    seed_ledger,
    seed_transactions,
)
from finnai.models.ledger import (
    AccountType,
    Category,
    NewAccount,
    NewTransaction,
    TransactionType,
)
from finnai.validation import MAX_AMOUNT


class TestSeedLedger:
    """Tests for the demo state."""

    def test_seed_counts(self, store):
        assert len(store.accounts) == 2
        assert len(store.transactions) == 7

    def test_seed_balances(self, store):
        assert store.get_account("acc1").balance == Decimal("5240")
        assert store.get_account("acc2").balance == Decimal("12000")

    def test_seed_satisfies_invariant(self, store):
        """Test opening balances are derived so the seed state is consistent."""
        assert store.check_balance_invariant() is True
        # 5240 already includes +3500 income and -1540 expenses
        assert store.initial_balance("acc1") == Decimal("3280")
        assert store.initial_balance("acc2") == Decimal("12000")


class TestAddTransaction:
    """Tests for LedgerStore.add_transaction."""

    def test_prepends_and_adjusts_balance(self, store):
        """Test the new transaction is newest-first and applied to its account."""
        transaction = store.add_transaction(NewTransaction(
            amount="19.99",
            description="Pharmacy",
            category=Category.HEALTH,
            account_id="acc1",
            transaction_date=date(2023, 10, 9),
        ))

        assert store.transactions[0] == transaction
        assert transaction.amount == Decimal("19.99")
        assert store.get_account("acc1").balance == Decimal("5220.01")
        assert store.get_account("acc2").balance == Decimal("12000")
        assert store.check_balance_invariant() is True

    def test_income_adds_to_balance(self, store):
        store.add_transaction(NewTransaction(
            amount=250,
            category=Category.INCOME,
            type=TransactionType.INCOME,
            account_id="acc2",
        ))
        assert store.get_account("acc2").balance == Decimal("12250")

    def test_generated_ids_are_unique(self, store):
        ids = {
            store.add_transaction(NewTransaction(amount="1", account_id="acc1")).id
            for _ in range(20)
        }
        assert len(ids) == 20
        assert ids.isdisjoint({t.id for t in seed_transactions()})

    def test_unknown_account_rejected(self, store):
        """Test nothing changes when the account does not exist."""
        before = store.snapshot()
        with pytest.raises(UnknownAccountError):
            store.add_transaction(NewTransaction(amount="10", account_id="nope"))
        assert store.snapshot() == before

    @pytest.mark.parametrize("amount", ["abc", "", "NaN", "inf", "12..5"])
    def test_non_numeric_amount_rejected(self, store, amount):
        """Test non-numeric amounts raise instead of poisoning balances."""
        before = store.snapshot()
        with pytest.raises(ValidationError) as exc_info:
            store.add_transaction(NewTransaction(amount=amount, account_id="acc1"))
        assert exc_info.value.field == "amount"
        assert store.snapshot() == before

    def test_negative_amount_rejected(self, store):
        with pytest.raises(ValidationError, match="negative"):
            store.add_transaction(NewTransaction(amount="-5", account_id="acc1"))

    @pytest.mark.parametrize("field, limit", [("description", 200), ("sub_category", 100)])
    def test_overlong_text_rejected(self, store, field, limit):
        """Test text past the record limits is a ledger error, not a schema crash."""
        before = store.snapshot()
        with pytest.raises(ValidationError) as exc_info:
            store.add_transaction(NewTransaction(
                amount="5",
                account_id="acc1",
                **{field: "x" * (limit + 1)},
            ))
        assert exc_info.value.field == field
        assert store.snapshot() == before

    def test_text_at_limit_accepted(self, store):
        transaction = store.add_transaction(NewTransaction(
            amount="5",
            account_id="acc1",
            description="x" * 200,
            sub_category="y" * 100,
        ))
        assert len(transaction.description) == 200

    def test_amount_above_ceiling_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            store.add_transaction(NewTransaction(amount="1e27", account_id="acc1"))
        assert exc_info.value.field == "amount"

    def test_amount_at_ceiling_accepted(self, store):
        transaction = store.add_transaction(NewTransaction(amount=str(MAX_AMOUNT), account_id="acc1"))
        assert transaction.amount == MAX_AMOUNT

    def test_transaction_is_immutable(self, store):
        transaction = store.add_transaction(NewTransaction(amount="5", account_id="acc1"))
        with pytest.raises(Exception):
            transaction.amount = Decimal("500")


class TestAddAccount:
    """Tests for LedgerStore.add_account."""

    def test_appends_account(self, store):
        account = store.add_account(NewAccount(
            name="Travel Card",
            type=AccountType.CREDIT_CARD,
            balance="-300.50",
        ))
        assert store.accounts[-1] == account
        assert account.balance == Decimal("-300.50")
        assert store.initial_balance(account.id) == Decimal("-300.50")

    @pytest.mark.parametrize("balance", [None, "", "lots"])
    def test_unparseable_balance_opens_at_zero(self, store, balance):
        account = store.add_account(NewAccount(name="Cash Jar", balance=balance))
        assert account.balance == Decimal("0")

    def test_empty_name_rejected(self, store):
        with pytest.raises(ValidationError):
            store.add_account(NewAccount(name="   "))

    def test_overlong_name_rejected(self, store):
        before = store.snapshot()
        with pytest.raises(ValidationError) as exc_info:
            store.add_account(NewAccount(name="n" * 101))
        assert exc_info.value.field == "name"
        assert store.snapshot() == before

    def test_name_at_limit_accepted(self, store):
        assert len(store.add_account(NewAccount(name="n" * 100)).name) == 100

    def test_new_account_receives_transactions(self, store):
        account = store.add_account(NewAccount(name="Wallet", type=AccountType.CASH, balance=40))
        store.add_transaction(NewTransaction(amount="15", account_id=account.id))
        assert store.get_account(account.id).balance == Decimal("25")


class TestStoreConstruction:
    """Tests for building a store from existing records."""

    def test_duplicate_account_ids_rejected(self):
        accounts = seed_accounts() + seed_accounts()[:1]
        with pytest.raises(DuplicateIdError):
            LedgerStore(accounts=accounts)

    def test_orphan_transaction_rejected(self):
        with pytest.raises(UnknownAccountError):
            LedgerStore(accounts=[], transactions=seed_transactions())

    def test_id_factory_skips_taken_ids(self):
        """Test a factory that would collide with seeded ids is stepped past them."""
        store = LedgerStore(
            accounts=seed_accounts(),
            transactions=seed_transactions(),
            transaction_id_factory=SequentialIdFactory(),
        )
        transaction = store.add_transaction(NewTransaction(amount="1", account_id="acc1"))
        assert transaction.id == "8"

    def test_sequential_id_factory(self):
        factory = SequentialIdFactory("acc-")
        assert [factory(), factory(), factory()] == ["acc-1", "acc-2", "acc-3"]


class TestBalanceInvariant:
    """Property test: random operation sequences keep every balance consistent."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_operations(self, seed):
        rng = random.Random(seed)
        store = seed_ledger()
        opening = {a.id: store.initial_balance(a.id) for a in store.accounts}

        for _ in range(60):
            if rng.random() < 0.2:
                balance = Decimal(rng.randint(-50000, 500000)) / 100
                account = store.add_account(NewAccount(
                    name=f"Account {len(store.accounts) + 1}",
                    type=rng.choice(list(AccountType)),
                    balance=str(balance),
                ))
                opening[account.id] = balance
            else:
                account = rng.choice(store.accounts)
                store.add_transaction(NewTransaction(
                    amount=str(Decimal(rng.randint(0, 100000)) / 100),
                    category=rng.choice(list(Category)),
                    type=rng.choice(list(TransactionType)),
                    account_id=account.id,
                ))

            for account in store.accounts:
                signed = sum(
                    (t.signed_amount for t in store.transactions if t.account_id == account.id),
                    Decimal("0"),
                )
                if account.id in ("acc1", "acc2"):
                    # Seed transactions are already inside the seed balances
                    signed -= sum(
                        (t.signed_amount for t in seed_transactions() if t.account_id == account.id),
                        Decimal("0"),
                    )
                    assert account.balance == Decimal(
                        {"acc1": "5240", "acc2": "12000"}[account.id]
                    ) + signed
                else:
                    assert account.balance == opening[account.id] + signed
            assert store.check_balance_invariant() is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
