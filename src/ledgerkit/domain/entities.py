"""Domain model entities for ledgerkit.

These are pure data classes representing bookkeeping concepts, independent of
database schema. Services receive and return these, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class BalanceType(str, Enum):
    """Side of a balance snapshot or ledger entry."""

    DEBIT = "D"
    CREDIT = "C"

    @property
    def opposite(self) -> "BalanceType":
        return BalanceType.CREDIT if self is BalanceType.DEBIT else BalanceType.DEBIT


class AccountType(str, Enum):
    """IFRS account classification."""

    NON_CURRENT_ASSET = "NON_CURRENT_ASSET"
    CONTRA_ASSET = "CONTRA_ASSET"
    INVENTORY = "INVENTORY"
    BANK = "BANK"
    CURRENT_ASSET = "CURRENT_ASSET"
    RECEIVABLE = "RECEIVABLE"
    NON_CURRENT_LIABILITY = "NON_CURRENT_LIABILITY"
    CONTROL = "CONTROL"
    CURRENT_LIABILITY = "CURRENT_LIABILITY"
    PAYABLE = "PAYABLE"
    EQUITY = "EQUITY"
    OPERATING_REVENUE = "OPERATING_REVENUE"
    OPERATING_EXPENSE = "OPERATING_EXPENSE"
    NON_OPERATING_REVENUE = "NON_OPERATING_REVENUE"
    DIRECT_EXPENSE = "DIRECT_EXPENSE"
    OVERHEAD_EXPENSE = "OVERHEAD_EXPENSE"
    OTHER_EXPENSE = "OTHER_EXPENSE"
    RECONCILIATION = "RECONCILIATION"

    @property
    def normal_balance(self) -> BalanceType:
        """Side on which a positive balance of this type is carried."""
        if self in CREDIT_NORMAL_TYPES:
            return BalanceType.CREDIT
        return BalanceType.DEBIT


CREDIT_NORMAL_TYPES = frozenset(
    {
        AccountType.CONTRA_ASSET,
        AccountType.NON_CURRENT_LIABILITY,
        AccountType.CONTROL,
        AccountType.CURRENT_LIABILITY,
        AccountType.PAYABLE,
        AccountType.EQUITY,
        AccountType.OPERATING_REVENUE,
        AccountType.NON_OPERATING_REVENUE,
    }
)


class TransactionType(str, Enum):
    """Transaction document types."""

    CS = "CS"  # Cash Sale
    IN = "IN"  # Client Invoice
    CN = "CN"  # Credit Note
    RC = "RC"  # Client Receipt
    CP = "CP"  # Cash Purchase
    BL = "BL"  # Supplier Bill
    DN = "DN"  # Debit Note
    PY = "PY"  # Supplier Payment
    CE = "CE"  # Contra Entry
    JN = "JN"  # Journal Entry


class PeriodStatus(str, Enum):
    """Reporting period status."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class ClearingStatus(str, Enum):
    """Whether a transaction still has an amount left to clear."""

    OPEN = "OPEN"
    CLEARED = "CLEARED"


@dataclass(frozen=True)
class Entity:
    """Reporting entity owning accounts, currencies and periods."""

    id: int
    name: str
    currency_id: Optional[int]
    year_start: int
    created_at: datetime


@dataclass(frozen=True)
class LedgerContext:
    """Explicit defaults for balance and aggregation calls.

    Replaces the authenticated-user lookups of a web session: callers state
    which entity they act for, its home currency, its fiscal year start month
    and what "today" is.
    """

    entity_id: int
    currency_id: Optional[int] = None
    year_start: int = 1
    today: date = field(default_factory=date.today)
    current_year: Optional[int] = None


@dataclass(frozen=True)
class Currency:
    """Currency domain entity."""

    id: int
    entity_id: Optional[int]
    currency_code: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class ExchangeRate:
    """Reporting-currency units per one unit of the referenced currency."""

    id: int
    currency_id: int
    valid_from: date
    rate: Decimal
    created_at: datetime


@dataclass(frozen=True)
class ReportingPeriod:
    """Fiscal year of an entity."""

    id: int
    entity_id: int
    calendar_year: int
    status: PeriodStatus
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Report grouping of accounts sharing one account type."""

    id: int
    entity_id: int
    name: str
    category_type: AccountType
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Classified, coded financial account.

    ``id`` is None until the account has been saved.
    """

    id: Optional[int]
    entity_id: int
    name: str
    account_type: Optional[AccountType]
    currency_id: Optional[int]
    category_id: Optional[int] = None
    code: Optional[int] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None


@dataclass(frozen=True)
class Balance:
    """Opening balance snapshot of an account for a reporting period.

    ``amount`` is in the account currency; ``rate`` is the rate of the
    referenced exchange rate record.
    """

    id: int
    account_id: int
    reporting_period_id: int
    exchange_rate_id: int
    amount: Decimal
    balance_type: BalanceType
    rate: Decimal
    created_at: datetime


@dataclass(frozen=True)
class LineItem:
    """Transaction line posting against a single account."""

    id: int
    transaction_id: int
    account_id: int
    amount: Decimal
    narration: Optional[str]


@dataclass(frozen=True)
class Transaction:
    """Posted transaction; ``amount`` is the sum of its line items."""

    id: int
    entity_id: int
    transaction_type: TransactionType
    transaction_date: date
    account_id: int
    exchange_rate_id: int
    credited: bool
    amount: Decimal
    narration: Optional[str]
    reference: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class LedgerEntry:
    """One side of a double entry posting."""

    id: int
    transaction_id: int
    account_id: int
    entry_type: BalanceType
    amount: Decimal
    rate: Decimal
    posting_date: date


@dataclass(frozen=True)
class Assignment:
    """Clearing relationship between two transactions."""

    id: int
    transaction_id: int
    cleared_id: int
    amount: Decimal
    assignment_date: date
    created_at: datetime


@dataclass(frozen=True)
class AccountSnapshot:
    """Account figures as shown in report sections."""

    id: int
    name: str
    account_type: AccountType
    type_label: str
    code: Optional[int]
    category_name: Optional[str]
    currency_id: Optional[int]
    opening_balance: Decimal
    current_balance: Decimal
    closing_balance: Decimal
    version: int = 1


@dataclass(frozen=True)
class SectionCategory:
    """Accounts of one report category and their total."""

    accounts: tuple[AccountSnapshot, ...]
    total: Decimal


@dataclass(frozen=True)
class SectionBalances:
    """Category breakdown of a report section.

    ``section_categories`` keeps first-seen order.
    """

    section_total: Decimal
    section_categories: dict[str, SectionCategory]
