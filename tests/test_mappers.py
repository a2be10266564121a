"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerkit.database.models import (
    Account as ORMAccount,
    Balance as ORMBalance,
    Category as ORMCategory,
    ExchangeRate as ORMExchangeRate,
    LineItem as ORMLineItem,
    ReportingPeriod as ORMReportingPeriod,
    Transaction as ORMTransaction,
)
from ledgerkit.database.mappers import (
    account_to_domain,
    balance_to_domain,
    category_to_domain,
    reporting_period_to_domain,
    transaction_to_domain,
)
from ledgerkit.domain.entities import (
    Account,
    AccountType,
    Balance,
    BalanceType,
    Category,
    PeriodStatus,
    Transaction,
    TransactionType,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=1,
            entity_id=1,
            name="Clients",
            account_type="RECEIVABLE",
            code=801,
            currency_id=1,
            category_id=None,
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.id == 1
        assert domain_account.account_type == AccountType.RECEIVABLE
        assert domain_account.code == 801
        assert domain_account.is_active
        assert domain_account.created_at == orm_account.created_at

    def test_deleted_account(self):
        """Test that deleted_at marks the account inactive."""
        orm_account = ORMAccount(
            id=2,
            entity_id=1,
            name="Old",
            account_type="BANK",
            code=501,
            currency_id=1,
            deleted_at=datetime.now(UTC),
        )
        assert not account_to_domain(orm_account).is_active


class TestCategoryMapper:
    """Tests for Category mapper."""

    def test_category_to_domain(self):
        """Test converting ORM Category to domain Category."""
        orm_category = ORMCategory(
            id=3, entity_id=1, name="Trade Debtors", category_type="RECEIVABLE"
        )
        domain_category = category_to_domain(orm_category)

        assert isinstance(domain_category, Category)
        assert domain_category.category_type == AccountType.RECEIVABLE


class TestReportingPeriodMapper:
    """Tests for ReportingPeriod mapper."""

    def test_status_restored_as_enum(self):
        orm_period = ORMReportingPeriod(id=1, entity_id=1, calendar_year=2024, status="CLOSED")
        assert reporting_period_to_domain(orm_period).status == PeriodStatus.CLOSED


class TestBalanceMapper:
    """Tests for Balance mapper."""

    def test_balance_carries_rate(self):
        """Test that the exchange rate of the balance is copied onto the entity."""
        rate = ORMExchangeRate(id=5, currency_id=1, valid_from=date(2024, 1, 1), rate=Decimal("1.25"))
        orm_balance = ORMBalance(
            id=1,
            account_id=1,
            reporting_period_id=1,
            exchange_rate_id=5,
            exchange_rate=rate,
            amount=Decimal("100"),
            balance_type="D",
        )
        domain_balance = balance_to_domain(orm_balance)

        assert isinstance(domain_balance, Balance)
        assert domain_balance.balance_type == BalanceType.DEBIT
        assert domain_balance.rate == Decimal("1.25")


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_amount_is_sum_of_line_items(self):
        """Test that the transaction amount totals its line items."""
        orm_txn = ORMTransaction(
            id=1,
            entity_id=1,
            transaction_type="IN",
            transaction_date=date(2024, 2, 1),
            account_id=1,
            exchange_rate_id=1,
            credited=False,
            line_items=[
                ORMLineItem(account_id=2, amount=Decimal("10.50")),
                ORMLineItem(account_id=3, amount=Decimal("4.50")),
            ],
        )
        domain_txn = transaction_to_domain(orm_txn)

        assert isinstance(domain_txn, Transaction)
        assert domain_txn.transaction_type == TransactionType.IN
        assert domain_txn.amount == Decimal("15.00")

    def test_explicit_amount(self):
        orm_txn = ORMTransaction(
            id=1,
            entity_id=1,
            transaction_type="JN",
            transaction_date=date(2024, 2, 1),
            account_id=1,
            exchange_rate_id=1,
            credited=True,
        )
        assert transaction_to_domain(orm_txn, amount=Decimal("7")).amount == Decimal("7")
