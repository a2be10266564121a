"""Currency and exchange rate domain services."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Currency, ExchangeRate, LedgerContext
from ledgerkit.domain.errors import (
    InvalidExchangeRate,
    NotFoundError,
    ValidationError,
    currency_not_found,
    exchange_rate_not_found,
    rate_not_found,
)

logger = logging.getLogger(__name__)


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"Invalid amount '{value}'") from None


def to_reporting(amount, rate) -> Decimal:
    """Convert an amount in transaction currency to reporting currency.

    Raises:
        InvalidExchangeRate: If the rate is zero or negative
    """
    rate = _to_decimal(rate)
    if rate <= 0:
        raise InvalidExchangeRate(rate)
    return _to_decimal(amount) / rate


@dataclass(frozen=True)
class Money:
    """Amount in a transaction currency with its rate to the reporting currency."""

    amount: Decimal
    rate: Decimal = Decimal("1")

    @property
    def reporting_amount(self) -> Decimal:
        return to_reporting(self.amount, self.rate)


class CurrencyService:
    """Service for managing currencies."""

    def __init__(self, db: Database):
        """Initialize currency service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_currency(self, context: LedgerContext, currency_code: str, name: str) -> int:
        """Create a currency for the context entity.

        Args:
            context: Ledger context
            currency_code: Three letter ISO code
            name: Currency name

        Returns:
            Currency ID

        Raises:
            ValidationError: If the code is not three letters
            ConflictError: If the code already exists
        """
        code = currency_code.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValidationError(f"Currency code must be three letters, got '{currency_code}'")
        currency_id = self.db.create_currency(context.entity_id, code, name.strip())
        logger.info("Created currency %s for entity %s", code, context.entity_id)
        return currency_id

    def get_currency(self, currency_id: int) -> Optional[Currency]:
        """Get currency by ID."""
        return self.db.get_currency(currency_id)

    def get_currency_by_code(self, context: LedgerContext, currency_code: str) -> Currency:
        """Get currency by code.

        Raises:
            NotFoundError: If the entity has no such currency
        """
        currency = self.db.get_currency_by_code(context.entity_id, currency_code.strip().upper())
        if currency is None:
            raise NotFoundError(currency_not_found(currency_code))
        return currency

    def list_currencies(self, context: LedgerContext) -> list[Currency]:
        """List currencies of the context entity."""
        return self.db.list_currencies(context.entity_id)


class ExchangeRateService:
    """Service for managing exchange rates."""

    def __init__(self, db: Database):
        """Initialize exchange rate service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_rate(self, currency_id: int, rate, valid_from: date) -> int:
        """Record a rate for a currency.

        Raises:
            InvalidExchangeRate: If the rate is not strictly positive
            NotFoundError: If the currency does not exist
        """
        rate = _to_decimal(rate)
        if rate <= 0:
            raise InvalidExchangeRate(rate)
        if self.db.get_currency(currency_id) is None:
            raise NotFoundError(currency_not_found(currency_id))
        rate_id = self.db.create_exchange_rate(currency_id, valid_from, rate)
        logger.info("Recorded rate %s for currency %s from %s", rate, currency_id, valid_from)
        return rate_id

    def get_rate(self, exchange_rate_id: int) -> ExchangeRate:
        """Get an exchange rate by ID.

        Raises:
            NotFoundError: If it does not exist
        """
        rate = self.db.get_exchange_rate(exchange_rate_id)
        if rate is None:
            raise NotFoundError(rate_not_found(exchange_rate_id))
        return rate

    def latest_rate(self, currency_id: int, as_of: date) -> ExchangeRate:
        """Get the latest rate valid on ``as_of``.

        Raises:
            NotFoundError: If the currency has no rate on or before the date
        """
        rate = self.db.get_latest_exchange_rate(currency_id, as_of)
        if rate is None:
            raise NotFoundError(exchange_rate_not_found(currency_id, as_of))
        return rate
