"""Human-readable labels, account code ranges and clearing tables."""

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ledgerkit.domain.entities import AccountType, BalanceType, TransactionType
from ledgerkit.domain.errors import ValidationError


ACCOUNT_TYPE_LABELS: dict[AccountType, str] = {
    AccountType.NON_CURRENT_ASSET: "Non Current Asset",
    AccountType.CONTRA_ASSET: "Contra Asset",
    AccountType.INVENTORY: "Inventory",
    AccountType.BANK: "Bank",
    AccountType.CURRENT_ASSET: "Current Asset",
    AccountType.RECEIVABLE: "Receivable",
    AccountType.NON_CURRENT_LIABILITY: "Non Current Liability",
    AccountType.CONTROL: "Control",
    AccountType.CURRENT_LIABILITY: "Current Liability",
    AccountType.PAYABLE: "Payable",
    AccountType.EQUITY: "Equity",
    AccountType.OPERATING_REVENUE: "Operating Revenue",
    AccountType.OPERATING_EXPENSE: "Operating Expense",
    AccountType.NON_OPERATING_REVENUE: "Non Operating Revenue",
    AccountType.DIRECT_EXPENSE: "Direct Expense",
    AccountType.OVERHEAD_EXPENSE: "Overhead Expense",
    AccountType.OTHER_EXPENSE: "Other Expense",
    AccountType.RECONCILIATION: "Reconciliation",
}

ACCOUNT_CODES: dict[AccountType, int] = {
    AccountType.NON_CURRENT_ASSET: 0,
    AccountType.CONTRA_ASSET: 300,
    AccountType.INVENTORY: 400,
    AccountType.BANK: 500,
    AccountType.CURRENT_ASSET: 600,
    AccountType.RECEIVABLE: 800,
    AccountType.NON_CURRENT_LIABILITY: 900,
    AccountType.CONTROL: 1000,
    AccountType.CURRENT_LIABILITY: 1100,
    AccountType.PAYABLE: 2000,
    AccountType.EQUITY: 3000,
    AccountType.OPERATING_REVENUE: 4000,
    AccountType.OPERATING_EXPENSE: 5000,
    AccountType.NON_OPERATING_REVENUE: 6000,
    AccountType.DIRECT_EXPENSE: 7000,
    AccountType.OVERHEAD_EXPENSE: 8000,
    AccountType.OTHER_EXPENSE: 9000,
    AccountType.RECONCILIATION: 9500,
}

TRANSACTION_TYPE_LABELS: dict[TransactionType, str] = {
    TransactionType.CS: "Cash Sale",
    TransactionType.IN: "Client Invoice",
    TransactionType.CN: "Credit Note",
    TransactionType.RC: "Client Receipt",
    TransactionType.CP: "Cash Purchase",
    TransactionType.BL: "Supplier Bill",
    TransactionType.DN: "Debit Note",
    TransactionType.PY: "Supplier Payment",
    TransactionType.CE: "Contra Entry",
    TransactionType.JN: "Journal Entry",
}

# Transaction types each clearing transaction type may clear
CLEARABLES: dict[TransactionType, tuple[TransactionType, ...]] = {
    TransactionType.RC: (TransactionType.IN, TransactionType.JN),
    TransactionType.CN: (TransactionType.IN, TransactionType.JN),
    TransactionType.PY: (TransactionType.BL, TransactionType.JN),
    TransactionType.DN: (TransactionType.BL, TransactionType.JN),
    TransactionType.JN: (TransactionType.IN, TransactionType.BL, TransactionType.JN),
}

# Transaction types whose main account is posted on the credit side
CREDITED_TYPES = frozenset(
    {
        TransactionType.CN,
        TransactionType.RC,
        TransactionType.CP,
        TransactionType.BL,
    }
)


@dataclass(frozen=True)
class LabelConfig:
    """Lookup tables injected into services.

    Every table is keyed by enum member; plain string values are accepted by
    the lookups and coerced to the enum first.
    """

    account_types: Mapping[AccountType, str] = field(
        default_factory=lambda: dict(ACCOUNT_TYPE_LABELS)
    )
    account_codes: Mapping[AccountType, int] = field(
        default_factory=lambda: dict(ACCOUNT_CODES)
    )
    transaction_types: Mapping[TransactionType, str] = field(
        default_factory=lambda: dict(TRANSACTION_TYPE_LABELS)
    )
    clearables: Mapping[TransactionType, tuple[TransactionType, ...]] = field(
        default_factory=lambda: dict(CLEARABLES)
    )
    credited_types: frozenset[TransactionType] = CREDITED_TYPES

    def get_type(self, account_type: AccountType | str) -> str:
        """Get human readable account type."""
        return self.account_types[coerce_account_type(account_type)]

    def get_types(self, account_types: Iterable[AccountType | str]) -> list[str]:
        """Get human readable account types."""
        return [self.get_type(t) for t in account_types]

    def base_code(self, account_type: AccountType | str) -> int:
        """Get the first code of the account type's code range."""
        return self.account_codes[coerce_account_type(account_type)]

    def get_transaction_type(self, transaction_type: TransactionType | str) -> str:
        """Get human readable transaction type."""
        return self.transaction_types[coerce_transaction_type(transaction_type)]

    def get_transaction_types(
        self, transaction_types: Iterable[TransactionType | str]
    ) -> list[str]:
        """Get human readable transaction types."""
        return [self.get_transaction_type(t) for t in transaction_types]

    def clearable_types(
        self, transaction_type: TransactionType | str
    ) -> tuple[TransactionType, ...]:
        """Transaction types a transaction of the given type may clear."""
        return tuple(self.clearables.get(coerce_transaction_type(transaction_type), ()))

    def is_credited(self, transaction_type: TransactionType | str) -> bool:
        """Whether the main account of this type is credited by default."""
        return coerce_transaction_type(transaction_type) in self.credited_types


def coerce_account_type(value: AccountType | str) -> AccountType:
    """Convert a string to an AccountType, rejecting unknown values."""
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown account type '{value}'") from None


def coerce_balance_type(value: BalanceType | str) -> BalanceType:
    """Convert "D", "C", "DEBIT" or "CREDIT" to a BalanceType."""
    if isinstance(value, BalanceType):
        return value
    text = str(value).strip().upper()
    if text in BalanceType.__members__:
        return BalanceType[text]
    try:
        return BalanceType(text)
    except ValueError:
        raise ValidationError(f"Unknown balance type '{value}'") from None


def coerce_transaction_type(value: TransactionType | str) -> TransactionType:
    """Convert a string to a TransactionType, rejecting unknown values."""
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown transaction type '{value}'") from None


DEFAULT_LABELS = LabelConfig()
