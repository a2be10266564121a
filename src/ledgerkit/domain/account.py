"""Account domain service.

Accounts are coded on first save, guarded against category mismatches and
only removable once their closing balance is zero.
"""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.currency import ExchangeRateService, Money
from ledgerkit.domain.entities import (
    Account,
    AccountSnapshot,
    AccountType,
    BalanceType,
    LedgerContext,
)
from ledgerkit.domain.errors import (
    ConflictError,
    HangingTransactions,
    InvalidCategoryType,
    MissingAccountType,
    MissingContext,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    currency_not_found,
)
from ledgerkit.domain.labels import (
    DEFAULT_LABELS,
    LabelConfig,
    coerce_account_type,
    coerce_balance_type,
)
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.period import ReportingPeriodService

logger = logging.getLogger(__name__)

# Attempts at finding a free code before giving up
CODE_ASSIGNMENT_ATTEMPTS = 5


def capitalize_first(name: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return name[:1].upper() + name[1:]


class AccountService:
    """Service for managing accounts and computing their balances."""

    def __init__(self, db: Database, labels: LabelConfig = DEFAULT_LABELS):
        """Initialize account service.

        Args:
            db: Database instance
            labels: Label and account code tables
        """
        self.db = db
        self.labels = labels
        self.periods = ReportingPeriodService(db)
        self.ledger = LedgerService(db)

    def get_type(self, account_type: AccountType | str) -> str:
        """Get human readable account type."""
        return self.labels.get_type(account_type)

    def get_types(self, account_types: Iterable[AccountType | str]) -> list[str]:
        """Get human readable account types."""
        return self.labels.get_types(account_types)

    def create_account(
        self,
        context: LedgerContext,
        name: str,
        account_type: Optional[AccountType | str],
        currency_id: Optional[int] = None,
        category_id: Optional[int] = None,
        code: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Account:
        """Create and save a new account.

        The currency defaults to the context's home currency.

        Raises:
            MissingContext: If no currency is given and the context has none
        """
        if currency_id is None:
            currency_id = context.currency_id
        if currency_id is None:
            raise MissingContext("No currency given and the entity has no home currency")

        account = Account(
            id=None,
            entity_id=context.entity_id,
            name=name,
            account_type=coerce_account_type(account_type) if account_type else None,
            currency_id=currency_id,
            category_id=category_id,
            code=code,
            description=description,
        )
        return self.save(context, account)

    def save(self, context: LedgerContext, account: Account) -> Account:
        """Validate, code and persist an account.

        Args:
            context: Ledger context
            account: Account to save; ``id`` None creates a new account

        Returns:
            The saved account as stored

        Raises:
            MissingAccountType: If the account has no type
            InvalidCategoryType: If the category groups a different type
            ConflictError: If no free code could be assigned
        """
        if account.account_type is None:
            raise MissingAccountType()
        account_type = coerce_account_type(account.account_type)

        if account.entity_id != context.entity_id:
            raise ValidationError(
                f"Account belongs to entity {account.entity_id}, not {context.entity_id}"
            )

        if account.category_id is not None:
            category = self.db.get_category(account.category_id)
            if category is None or category.entity_id != context.entity_id:
                raise NotFoundError(category_not_found(account.category_id))
            if category.category_type != account_type:
                raise InvalidCategoryType(account_type.value, category.category_type.value)

        # Currencies without an entity are shared by all entities
        currency = (
            self.db.get_currency(account.currency_id) if account.currency_id is not None else None
        )
        if currency is None or currency.entity_id not in (None, context.entity_id):
            raise NotFoundError(currency_not_found(account.currency_id))

        name = capitalize_first(account.name.strip())
        if not name:
            raise ValidationError("Account name cannot be empty")
        account = replace(account, name=name, account_type=account_type)

        if account.id is not None:
            return self._update(context, account)

        if account.code is not None:
            account_id = self._insert(account, account.code)
        else:
            account_id = self._insert_with_next_code(account)

        saved = self.db.get_account(account_id)
        logger.info(
            "Saved %s account '%s' with code %s", account_type.value, saved.name, saved.code
        )
        return saved

    def _insert(self, account: Account, code: int) -> int:
        return self.db.create_account(
            entity_id=account.entity_id,
            name=account.name,
            account_type=account.account_type,
            code=code,
            currency_id=account.currency_id,
            category_id=account.category_id,
            description=account.description,
        )

    def _insert_with_next_code(self, account: Account) -> int:
        # The count-then-insert sequence is not atomic; the unique constraint on
        # (entity, type, code) rejects a concurrent duplicate and we move on.
        existing = self.db.count_accounts(
            account.entity_id, account.account_type, include_deleted=True
        )
        base = self.labels.base_code(account.account_type)
        for attempt in range(CODE_ASSIGNMENT_ATTEMPTS):
            code = base + existing + 1 + attempt
            try:
                return self._insert(account, code)
            except ConflictError:
                logger.warning(
                    "Account code %s for %s already taken, retrying",
                    code,
                    account.account_type.value,
                )
        raise ConflictError(
            f"Could not assign a free {account.account_type.value} account code "
            f"after {CODE_ASSIGNMENT_ATTEMPTS} attempts"
        )

    def _update(self, context: LedgerContext, account: Account) -> Account:
        stored = self.require_account(account.id, context)

        # Codes are permanent once assigned
        code = stored.code
        self.db.update_account(
            account_id=account.id,
            name=account.name,
            account_type=account.account_type,
            code=code,
            currency_id=account.currency_id,
            category_id=account.category_id,
            description=account.description,
        )
        logger.info("Updated account %s", account.id)
        return self.db.get_account(account.id)

    def get_account(self, account_id: int, include_deleted: bool = False) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID
            include_deleted: Also return soft deleted accounts

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id, include_deleted=include_deleted)

    def require_account(
        self, account_id: int, context: Optional[LedgerContext] = None
    ) -> Account:
        """Get an active account or raise NotFoundError.

        With a context, accounts of other entities count as missing.
        """
        account = self.db.get_account(account_id)
        if account is None or (context is not None and account.entity_id != context.entity_id):
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(
        self,
        context: LedgerContext,
        account_types: Optional[Iterable[AccountType | str]] = None,
        include_deleted: bool = False,
    ) -> list[Account]:
        """List accounts of the context entity."""
        if account_types is not None:
            account_types = [coerce_account_type(t) for t in account_types]
        return self.db.list_accounts(
            context.entity_id, account_types=account_types, include_deleted=include_deleted
        )

    def opening_balance(
        self, context: LedgerContext, account: Account, year: Optional[int] = None
    ) -> Decimal:
        """Opening balance of an account for a reporting period.

        Args:
            context: Ledger context
            account: Account
            year: Reporting year; defaults to the context's current period

        Returns:
            Sum of the period's balance snapshots in reporting currency,
            debits positive

        Raises:
            PeriodNotFound: If no period exists for the year
        """
        if year is not None:
            period = self.periods.period_by_year(context, year)
        else:
            period = self.periods.current_period(context)

        balance = Decimal("0")
        for record in self.db.list_balances(account.id, reporting_period_id=period.id):
            amount = Money(record.amount, record.rate).reporting_amount
            if record.balance_type == BalanceType.DEBIT:
                balance += amount
            else:
                balance -= amount
        return balance

    def closing_balance(
        self,
        context: LedgerContext,
        account: Account,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        """Opening balance plus ledger movement up to ``end_date``.

        ``end_date`` defaults to today and ``start_date`` to the start of the
        reporting period containing ``end_date``.
        """
        start, end, year = self.periods.resolve_range(context, start_date, end_date)
        closing = self.opening_balance(context, account, year) + self.ledger.movement(
            account, start, end
        )
        logger.debug("Closing balance of account %s at %s: %s", account.id, end, closing)
        return closing

    def snapshot(
        self,
        context: LedgerContext,
        account: Account,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AccountSnapshot:
        """Report snapshot of an account for a date range."""
        start, end, year = self.periods.resolve_range(context, start_date, end_date)
        opening = self.opening_balance(context, account, year)
        current = self.ledger.movement(account, start, end)

        category_name = None
        if account.category_id is not None:
            category = self.db.get_category(account.category_id)
            category_name = category.name if category is not None else None

        return AccountSnapshot(
            id=account.id,
            name=account.name,
            account_type=account.account_type,
            type_label=self.get_type(account.account_type),
            code=account.code,
            category_name=category_name,
            currency_id=account.currency_id,
            opening_balance=opening,
            current_balance=current,
            closing_balance=opening + current,
        )

    def delete_account(self, context: LedgerContext, account_id: int) -> None:
        """Soft delete an account whose closing balance is zero.

        Raises:
            NotFoundError: If the account does not exist
            HangingTransactions: If the account still carries a balance
        """
        account = self.require_account(account_id, context)

        closing = self.closing_balance(context, account)
        if closing != 0:
            raise HangingTransactions(account_id, closing)

        self.db.soft_delete_account(account_id)
        logger.info("Deleted account %s", account_id)


class BalanceService:
    """Service recording opening balance snapshots."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db
        self.periods = ReportingPeriodService(db)
        self.rates = ExchangeRateService(db)

    def create_balance(
        self,
        context: LedgerContext,
        account_id: int,
        year: int,
        amount,
        balance_type: BalanceType | str,
        exchange_rate_id: Optional[int] = None,
    ) -> int:
        """Record the opening balance of an account for a reporting period.

        Args:
            context: Ledger context
            account_id: Account ID
            year: Reporting year the balance opens
            amount: Positive amount in the account currency
            balance_type: DEBIT or CREDIT
            exchange_rate_id: Rate to use; defaults to the latest rate of the
                account currency valid at the period start

        Returns:
            Balance ID
        """
        account = self.db.get_account(account_id)
        if account is None or account.entity_id != context.entity_id:
            raise NotFoundError(account_not_found(account_id))

        amount = Decimal(str(amount))
        if amount <= 0:
            raise ValidationError("Balance amount must be greater than zero")
        balance_type = coerce_balance_type(balance_type)

        period = self.periods.period_by_year(context, year)
        if exchange_rate_id is None:
            start = date(year, context.year_start, 1)
            exchange_rate_id = self.rates.latest_rate(account.currency_id, start).id
        else:
            self.rates.get_rate(exchange_rate_id)

        balance_id = self.db.create_balance(
            account_id=account_id,
            reporting_period_id=period.id,
            exchange_rate_id=exchange_rate_id,
            amount=amount,
            balance_type=balance_type,
        )
        logger.info(
            "Recorded %s opening balance of %s for account %s in %s",
            balance_type.name,
            amount,
            account_id,
            year,
        )
        return balance_id
