"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Iterable, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class MissingContext(DomainError):
    """A default could not be resolved from the ledger context."""


class MissingAccountType(ValidationError):
    """Account saved without a classification."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Account must have a Type")


class InvalidCategoryType(ValidationError):
    """Account category and account type disagree."""

    def __init__(self, account_type: str, category_type: str):
        self.account_type = account_type
        self.category_type = category_type
        super().__init__(
            f"Cannot assign {_value(account_type)} Account to "
            f"{_value(category_type)} Category"
        )


class HangingTransactions(DependencyError):
    """Account still carries a balance and may not be deleted."""

    def __init__(self, account_id: Optional[int] = None, balance: Optional[Decimal] = None):
        self.account_id = account_id
        self.balance = balance
        target = "Account" if account_id is None else f"Account {account_id}"
        super().__init__(
            f"{target} cannot be deleted because it has existing Transactions/Balances "
            "in the current Reporting Period"
        )


class PeriodNotFound(NotFoundError):
    """No reporting period matches the requested year."""

    def __init__(self, year: Optional[int] = None):
        self.year = year
        if year is None:
            super().__init__("Reporting Period not found")
        else:
            super().__init__(f"Reporting Period for year {year} not found")


class ClosedReportingPeriod(ValidationError):
    """Postings into a closed reporting period are not allowed."""

    def __init__(self, year: int):
        self.year = year
        super().__init__(
            f"Transaction cannot be saved because the Reporting Period for {year} is closed"
        )


class InvalidExchangeRate(ValidationError):
    """Exchange rates must be strictly positive."""

    def __init__(self, rate):
        self.rate = rate
        super().__init__(f"Exchange Rate must be greater than zero, got {rate}")


class UnbalancedTransaction(ValidationError):
    """Debit and credit postings of a transaction differ."""

    def __init__(self, debits: Decimal, credits: Decimal):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Total Debit amount {debits} does not equal total Credit amount {credits}"
        )


class OverClearance(ValidationError):
    """Clearing amount exceeds what is left to clear."""

    def __init__(self, amount: Decimal, available: Decimal):
        self.amount = amount
        self.available = available
        super().__init__(
            f"Cannot clear {amount}: only {available} remains to be cleared"
        )


class UnclearableTransaction(ValidationError):
    """Transaction type may not be cleared by the clearing transaction.

    ``transaction_type`` and ``allowed_types`` are kept as given; the message
    renders them through the supplied labels.
    """

    def __init__(
        self,
        transaction_type: str,
        allowed_types: Iterable[str],
        labels=None,
        message: Optional[str] = None,
    ):
        self.transaction_type = transaction_type
        self.allowed_types = tuple(allowed_types)
        if labels is not None:
            type_name = labels.get_transaction_type(transaction_type)
            allowed_names = labels.get_transaction_types(self.allowed_types)
        else:
            type_name = _value(transaction_type)
            allowed_names = [_value(t) for t in self.allowed_types]

        error = (
            f"{type_name} Transaction cannot be cleared. "
            f"Transaction to be cleared must be one of: {', '.join(allowed_names)}"
        )
        if message:
            error = f"{error} {message}"
        super().__init__(error)


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


def entity_not_found(entity_id: int) -> str:
    """Return message for missing entity."""
    return f"Entity {entity_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def currency_not_found(currency: int | str) -> str:
    """Return message for missing currency by ID or code."""
    return f"Currency {currency} not found"


def exchange_rate_not_found(currency_id: int, as_of=None) -> str:
    """Return message when no rate is valid for a currency."""
    if as_of is None:
        return f"No Exchange Rate found for currency {currency_id}"
    return f"No Exchange Rate found for currency {currency_id} on or before {as_of}"


def rate_not_found(exchange_rate_id: int) -> str:
    """Return message for a missing exchange rate by ID."""
    return f"Exchange Rate {exchange_rate_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_period(year: int) -> str:
    """Return message for an already existing reporting period."""
    return f"Reporting Period for year {year} already exists"


def duplicate_account_code(code: int, account_type: str) -> str:
    """Return message for an account code already in use."""
    return f"Account code {code} is already used by a {_value(account_type)} account"
