"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Iterable
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import (
    Entity,
    Currency,
    ExchangeRate,
    ReportingPeriod,
    PeriodStatus,
    Category,
    Account,
    AccountType,
    Balance,
    BalanceType,
    Transaction,
    TransactionType,
    LineItem,
    LedgerEntry,
    Assignment,
)


class Database(ABC):
    """Abstract database interface for ledgerkit.

    Implementations raise ``ConflictError`` when a uniqueness constraint is
    violated and ``NotFoundError`` when an update targets a missing row.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Entity operations
    @abstractmethod
    def create_entity(self, name: str, year_start: int = 1) -> int:
        """Create a reporting entity. Returns entity ID."""
        pass

    @abstractmethod
    def get_entity(self, entity_id: int) -> Optional[Entity]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def list_entities(self) -> list[Entity]:
        """List all entities."""
        pass

    @abstractmethod
    def set_entity_currency(self, entity_id: int, currency_id: int) -> None:
        """Set the home currency of an entity."""
        pass

    # Currency operations
    @abstractmethod
    def create_currency(self, entity_id: Optional[int], currency_code: str, name: str) -> int:
        """Create a currency. Returns currency ID."""
        pass

    @abstractmethod
    def get_currency(self, currency_id: int) -> Optional[Currency]:
        """Get currency by ID."""
        pass

    @abstractmethod
    def get_currency_by_code(self, entity_id: int, currency_code: str) -> Optional[Currency]:
        """Get currency by its ISO code within an entity."""
        pass

    @abstractmethod
    def list_currencies(self, entity_id: int) -> list[Currency]:
        """List currencies of an entity."""
        pass

    # Exchange rate operations
    @abstractmethod
    def create_exchange_rate(self, currency_id: int, valid_from: date, rate: Decimal) -> int:
        """Create an exchange rate. Returns exchange rate ID."""
        pass

    @abstractmethod
    def get_exchange_rate(self, exchange_rate_id: int) -> Optional[ExchangeRate]:
        """Get exchange rate by ID."""
        pass

    @abstractmethod
    def get_latest_exchange_rate(self, currency_id: int, as_of: date) -> Optional[ExchangeRate]:
        """Get the most recent rate of a currency valid on or before a date."""
        pass

    # Reporting period operations
    @abstractmethod
    def create_reporting_period(
        self, entity_id: int, calendar_year: int, status: PeriodStatus = PeriodStatus.OPEN
    ) -> int:
        """Create a reporting period. Returns period ID."""
        pass

    @abstractmethod
    def get_reporting_period_by_year(
        self, entity_id: int, calendar_year: int
    ) -> Optional[ReportingPeriod]:
        """Get the reporting period of an entity for a calendar year."""
        pass

    @abstractmethod
    def list_reporting_periods(self, entity_id: int) -> list[ReportingPeriod]:
        """List reporting periods of an entity ordered by year."""
        pass

    @abstractmethod
    def update_reporting_period_status(self, period_id: int, status: PeriodStatus) -> None:
        """Open or close a reporting period."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, entity_id: int, name: str, category_type: AccountType) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(
        self, entity_id: int, category_type: Optional[AccountType] = None
    ) -> list[Category]:
        """List categories, optionally filtered by type."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        entity_id: int,
        name: str,
        account_type: AccountType,
        code: int,
        currency_id: int,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create an account. Returns account ID."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: str,
        account_type: AccountType,
        code: int,
        currency_id: int,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        """Overwrite the stored fields of an account."""
        pass

    @abstractmethod
    def get_account(self, account_id: int, include_deleted: bool = False) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(
        self,
        entity_id: int,
        account_types: Optional[Iterable[AccountType]] = None,
        include_deleted: bool = False,
    ) -> list[Account]:
        """List accounts of an entity in creation order."""
        pass

    @abstractmethod
    def count_accounts(
        self, entity_id: int, account_type: AccountType, include_deleted: bool = True
    ) -> int:
        """Count accounts of a type within an entity."""
        pass

    @abstractmethod
    def soft_delete_account(self, account_id: int) -> None:
        """Mark an account as deleted."""
        pass

    # Balance operations
    @abstractmethod
    def create_balance(
        self,
        account_id: int,
        reporting_period_id: int,
        exchange_rate_id: int,
        amount: Decimal,
        balance_type: BalanceType,
    ) -> int:
        """Create an opening balance snapshot. Returns balance ID."""
        pass

    @abstractmethod
    def list_balances(
        self, account_id: int, reporting_period_id: Optional[int] = None
    ) -> list[Balance]:
        """List balance snapshots of an account, optionally for one period."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        entity_id: int,
        transaction_type: TransactionType,
        transaction_date: date,
        account_id: int,
        exchange_rate_id: int,
        credited: bool,
        line_items: list[tuple[int, Decimal, Optional[str]]],
        ledger_entries: list[tuple[int, BalanceType, Decimal]],
        rate: Decimal,
        narration: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> int:
        """Create a transaction with its line items and ledger entries.

        Args:
            line_items: (account_id, amount, narration) per line
            ledger_entries: (account_id, entry_type, amount) per posting
            rate: Exchange rate stored on every ledger entry

        Returns the transaction ID. Everything is written in one commit.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        entity_id: int,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters."""
        pass

    @abstractmethod
    def list_line_items(self, transaction_id: int) -> list[LineItem]:
        """List line items of a transaction."""
        pass

    # Ledger operations
    @abstractmethod
    def list_ledger_entries(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_id: Optional[int] = None,
    ) -> list[LedgerEntry]:
        """List ledger entries with inclusive date bounds."""
        pass

    # Assignment operations
    @abstractmethod
    def create_assignment(
        self, transaction_id: int, cleared_id: int, amount: Decimal, assignment_date: date
    ) -> int:
        """Create a clearing assignment. Returns assignment ID."""
        pass

    @abstractmethod
    def list_assignments(
        self, transaction_id: Optional[int] = None, cleared_id: Optional[int] = None
    ) -> list[Assignment]:
        """List assignments made by and/or against transactions."""
        pass
