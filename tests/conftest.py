"""Shared pytest fixtures for ledgerkit tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import AccountService, BalanceService
from ledgerkit.domain.category import CategoryService
from ledgerkit.domain.chart import ChartOfAccountsService
from ledgerkit.domain.clearing import ClearingService
from ledgerkit.domain.currency import CurrencyService, ExchangeRateService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.entity import EntityService
from ledgerkit.domain.period import ReportingPeriodService
from ledgerkit.domain.transaction import NewLineItem, TransactionService

TODAY = date(2024, 6, 30)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def entity_service(temp_db):
    """Create an EntityService with a temporary database."""
    return EntityService(temp_db)


@pytest.fixture
def context(temp_db, entity_service):
    """Entity with USD home currency, periods 2023 and 2024 and a 1.0 rate.

    Today is fixed at 2024-06-30.
    """
    entity_id = entity_service.create_entity("Acme Ltd", "USD", "US Dollar")
    ctx = entity_service.build_context(entity_id, today=TODAY)
    ExchangeRateService(temp_db).add_rate(ctx.currency_id, Decimal("1.0"), date(2020, 1, 1))
    periods = ReportingPeriodService(temp_db)
    periods.create_period(ctx, 2023)
    periods.create_period(ctx, 2024)
    return ctx


@pytest.fixture
def other_context(context, temp_db, entity_service):
    """A second entity (EUR, period 2024) sharing the database with ``context``."""
    entity_id = entity_service.create_entity("Beta GmbH", "EUR", "Euro")
    ctx = entity_service.build_context(entity_id, today=TODAY)
    ExchangeRateService(temp_db).add_rate(ctx.currency_id, Decimal("1.0"), date(2020, 1, 1))
    ReportingPeriodService(temp_db).create_period(ctx, 2024)
    return ctx


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def currency_service(temp_db):
    """Create a CurrencyService with a temporary database."""
    return CurrencyService(temp_db)


@pytest.fixture
def rate_service(temp_db):
    """Create an ExchangeRateService with a temporary database."""
    return ExchangeRateService(temp_db)


@pytest.fixture
def period_service(temp_db):
    """Create a ReportingPeriodService with a temporary database."""
    return ReportingPeriodService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def clearing_service(temp_db):
    """Create a ClearingService with a temporary database."""
    return ClearingService(temp_db)


@pytest.fixture
def chart_service(temp_db):
    """Create a ChartOfAccountsService with a temporary database."""
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def chart(context, account_service):
    """Seed a small chart of accounts."""
    return {
        "receivable": account_service.create_account(context, "clients", AccountType.RECEIVABLE),
        "bank": account_service.create_account(context, "main bank", AccountType.BANK),
        "revenue": account_service.create_account(
            context, "sales", AccountType.OPERATING_REVENUE
        ),
    }


@pytest.fixture
def post(context, transaction_service):
    """Post a single line transaction and return its ID."""

    def _post(transaction_type, account, line_account, amount, day, **kwargs):
        return transaction_service.post_transaction(
            context,
            transaction_type=transaction_type,
            transaction_date=day,
            account_id=account.id,
            lines=[NewLineItem(account_id=line_account.id, amount=Decimal(str(amount)))],
            **kwargs,
        )

    return _post


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
