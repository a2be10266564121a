"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain never sees ORM rows
and enum values are restored from their stored string form.
"""

from decimal import Decimal
from typing import Optional

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Entity as ORMEntity,
    Currency as ORMCurrency,
    ExchangeRate as ORMExchangeRate,
    ReportingPeriod as ORMReportingPeriod,
    Category as ORMCategory,
    Account as ORMAccount,
    Balance as ORMBalance,
    Transaction as ORMTransaction,
    LineItem as ORMLineItem,
    Ledger as ORMLedger,
    Assignment as ORMAssignment,
)


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def entity_to_domain(orm_entity: ORMEntity) -> domain.Entity:
    """Convert SQLAlchemy Entity model to domain Entity."""
    return domain.Entity(
        id=orm_entity.id,
        name=orm_entity.name,
        currency_id=orm_entity.currency_id,
        year_start=orm_entity.year_start,
        created_at=orm_entity.created_at,
    )


def currency_to_domain(orm_currency: ORMCurrency) -> domain.Currency:
    """Convert SQLAlchemy Currency model to domain Currency."""
    return domain.Currency(
        id=orm_currency.id,
        entity_id=orm_currency.entity_id,
        currency_code=orm_currency.currency_code,
        name=orm_currency.name,
        created_at=orm_currency.created_at,
    )


def exchange_rate_to_domain(orm_rate: ORMExchangeRate) -> domain.ExchangeRate:
    """Convert SQLAlchemy ExchangeRate model to domain ExchangeRate."""
    return domain.ExchangeRate(
        id=orm_rate.id,
        currency_id=orm_rate.currency_id,
        valid_from=orm_rate.valid_from,
        rate=_decimal(orm_rate.rate),
        created_at=orm_rate.created_at,
    )


def reporting_period_to_domain(orm_period: ORMReportingPeriod) -> domain.ReportingPeriod:
    """Convert SQLAlchemy ReportingPeriod model to domain ReportingPeriod."""
    return domain.ReportingPeriod(
        id=orm_period.id,
        entity_id=orm_period.entity_id,
        calendar_year=orm_period.calendar_year,
        status=domain.PeriodStatus(orm_period.status),
        created_at=orm_period.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category."""
    return domain.Category(
        id=orm_category.id,
        entity_id=orm_category.entity_id,
        name=orm_category.name,
        category_type=domain.AccountType(orm_category.category_type),
        created_at=orm_category.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account."""
    return domain.Account(
        id=orm_account.id,
        entity_id=orm_account.entity_id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        currency_id=orm_account.currency_id,
        category_id=orm_account.category_id,
        code=orm_account.code,
        description=orm_account.description,
        created_at=orm_account.created_at,
        deleted_at=orm_account.deleted_at,
    )


def balance_to_domain(orm_balance: ORMBalance) -> domain.Balance:
    """Convert SQLAlchemy Balance model (with its exchange rate) to domain Balance."""
    return domain.Balance(
        id=orm_balance.id,
        account_id=orm_balance.account_id,
        reporting_period_id=orm_balance.reporting_period_id,
        exchange_rate_id=orm_balance.exchange_rate_id,
        amount=_decimal(orm_balance.amount),
        balance_type=domain.BalanceType(orm_balance.balance_type),
        rate=_decimal(orm_balance.exchange_rate.rate),
        created_at=orm_balance.created_at,
    )


def transaction_to_domain(
    orm_transaction: ORMTransaction, amount: Optional[Decimal] = None
) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction.

    The amount is the sum of the line items unless given explicitly.
    """
    if amount is None:
        amount = sum(
            (_decimal(item.amount) for item in orm_transaction.line_items), Decimal("0")
        )
    return domain.Transaction(
        id=orm_transaction.id,
        entity_id=orm_transaction.entity_id,
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        transaction_date=orm_transaction.transaction_date,
        account_id=orm_transaction.account_id,
        exchange_rate_id=orm_transaction.exchange_rate_id,
        credited=orm_transaction.credited,
        amount=amount,
        narration=orm_transaction.narration,
        reference=orm_transaction.reference,
        created_at=orm_transaction.created_at,
    )


def line_item_to_domain(orm_item: ORMLineItem) -> domain.LineItem:
    """Convert SQLAlchemy LineItem model to domain LineItem."""
    return domain.LineItem(
        id=orm_item.id,
        transaction_id=orm_item.transaction_id,
        account_id=orm_item.account_id,
        amount=_decimal(orm_item.amount),
        narration=orm_item.narration,
    )


def ledger_to_domain(orm_ledger: ORMLedger) -> domain.LedgerEntry:
    """Convert SQLAlchemy Ledger model to domain LedgerEntry."""
    return domain.LedgerEntry(
        id=orm_ledger.id,
        transaction_id=orm_ledger.transaction_id,
        account_id=orm_ledger.account_id,
        entry_type=domain.BalanceType(orm_ledger.entry_type),
        amount=_decimal(orm_ledger.amount),
        rate=_decimal(orm_ledger.rate),
        posting_date=orm_ledger.posting_date,
    )


def assignment_to_domain(orm_assignment: ORMAssignment) -> domain.Assignment:
    """Convert SQLAlchemy Assignment model to domain Assignment."""
    return domain.Assignment(
        id=orm_assignment.id,
        transaction_id=orm_assignment.transaction_id,
        cleared_id=orm_assignment.cleared_id,
        amount=_decimal(orm_assignment.amount),
        assignment_date=orm_assignment.assignment_date,
        created_at=orm_assignment.created_at,
    )
