"""Transaction domain service."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.currency import ExchangeRateService
from ledgerkit.domain.entities import (
    BalanceType,
    LedgerContext,
    LineItem,
    Transaction,
    TransactionType,
)
from ledgerkit.domain.errors import (
    NotFoundError,
    UnbalancedTransaction,
    ValidationError,
    transaction_not_found,
)
from ledgerkit.domain.labels import DEFAULT_LABELS, LabelConfig, coerce_transaction_type
from ledgerkit.domain.period import ReportingPeriodService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewLineItem:
    """Line of a transaction about to be posted.

    ``credited`` left as None posts the line against the main account. A line
    with an explicit side is a compound line: it posts only to its own
    account, so compound lines have to offset each other.
    """

    account_id: int
    amount: Decimal
    narration: Optional[str] = None
    credited: Optional[bool] = None


class TransactionService:
    """Service for posting transactions to the ledger."""

    def __init__(self, db: Database, labels: LabelConfig = DEFAULT_LABELS):
        """Initialize transaction service.

        Args:
            db: Database instance
            labels: Label tables (credited defaults per type)
        """
        self.db = db
        self.labels = labels
        self.periods = ReportingPeriodService(db)
        self.rates = ExchangeRateService(db)
        self.accounts = AccountService(db, labels)

    def post_transaction(
        self,
        context: LedgerContext,
        transaction_type: TransactionType | str,
        transaction_date: date,
        account_id: int,
        lines: Sequence[NewLineItem],
        exchange_rate_id: Optional[int] = None,
        credited: Optional[bool] = None,
        narration: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> int:
        """Post a transaction and its double entries.

        The main account takes one side of every plain line and the line
        account the other, so each such line produces one debit and one
        credit of the same amount. Compound lines post a single entry on the
        side they name.

        Args:
            context: Ledger context
            transaction_type: Transaction type
            transaction_date: Posting date
            account_id: Main account ID
            lines: Line items
            exchange_rate_id: Rate to post at; defaults to the latest rate of
                the main account currency valid on the posting date
            credited: Whether the main account is credited; defaults per type
            narration: Optional narration
            reference: Optional reference

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the lines are empty, not positive, post to the
                main account or none of them posts against it
            NotFoundError: If an account of the entity or the exchange rate
                does not exist
            UnbalancedTransaction: If the compound lines do not offset
            PeriodNotFound: If no period contains the posting date
            ClosedReportingPeriod: If that period is closed
        """
        transaction_type = coerce_transaction_type(transaction_type)
        if not lines:
            raise ValidationError("A Transaction must have at least one line item")

        account = self.accounts.require_account(account_id, context)

        line_items: list[tuple[int, Decimal, Optional[str]]] = []
        line_sides: list[Optional[bool]] = []
        for line in lines:
            amount = Decimal(str(line.amount))
            if amount <= 0:
                raise ValidationError(f"Line item amount must be greater than zero, got {amount}")
            if line.account_id == account_id:
                raise ValidationError(
                    "A Transaction line item cannot post to the Transaction's main account"
                )
            self.accounts.require_account(line.account_id, context)
            line_items.append((line.account_id, amount, line.narration))
            line_sides.append(line.credited)
        if all(side is not None for side in line_sides):
            raise ValidationError(
                "At least one line item must post against the Transaction's main account"
            )

        self.periods.ensure_open(context, transaction_date)

        if exchange_rate_id is None:
            rate = self.rates.latest_rate(account.currency_id, transaction_date)
        else:
            rate = self.rates.get_rate(exchange_rate_id)

        if credited is None:
            credited = self.labels.is_credited(transaction_type)
        main_side = BalanceType.CREDIT if credited else BalanceType.DEBIT

        ledger_entries: list[tuple[int, BalanceType, Decimal]] = []
        for (line_account_id, amount, _), line_credited in zip(line_items, line_sides):
            if line_credited is None:
                ledger_entries.append((account_id, main_side, amount))
                ledger_entries.append((line_account_id, main_side.opposite, amount))
            else:
                side = BalanceType.CREDIT if line_credited else BalanceType.DEBIT
                ledger_entries.append((line_account_id, side, amount))
        check_balanced(ledger_entries)

        transaction_id = self.db.create_transaction(
            entity_id=context.entity_id,
            transaction_type=transaction_type,
            transaction_date=transaction_date,
            account_id=account_id,
            exchange_rate_id=rate.id,
            credited=credited,
            line_items=line_items,
            ledger_entries=ledger_entries,
            rate=rate.rate,
            narration=narration,
            reference=reference,
        )
        logger.info(
            "Posted %s transaction %s on %s for account %s",
            transaction_type.value,
            transaction_id,
            transaction_date,
            account_id,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(
        self, transaction_id: int, context: Optional[LedgerContext] = None
    ) -> Transaction:
        """Get a transaction or raise NotFoundError.

        With a context, transactions of other entities count as missing.
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None or (
            context is not None and transaction.entity_id != context.entity_id
        ):
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        context: LedgerContext,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions of the context entity."""
        return self.db.list_transactions(
            context.entity_id, account_id=account_id, start_date=start_date, end_date=end_date
        )

    def get_line_items(self, transaction_id: int) -> list[LineItem]:
        """List line items of a transaction."""
        return self.db.list_line_items(transaction_id)


def check_balanced(ledger_entries: Sequence[tuple[int, BalanceType, Decimal]]) -> None:
    """Raise UnbalancedTransaction unless debits equal credits."""
    debits = sum(
        (amount for _, side, amount in ledger_entries if side == BalanceType.DEBIT), Decimal("0")
    )
    credits = sum(
        (amount for _, side, amount in ledger_entries if side == BalanceType.CREDIT), Decimal("0")
    )
    if debits != credits:
        raise UnbalancedTransaction(debits, credits)
