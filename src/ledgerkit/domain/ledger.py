"""Ledger movement queries."""

import logging
from datetime import date
from decimal import Decimal

from ledgerkit.database.base import Database
from ledgerkit.domain.currency import Money
from ledgerkit.domain.entities import Account, BalanceType, LedgerEntry

logger = logging.getLogger(__name__)


def signed_amount(entry: LedgerEntry) -> Decimal:
    """Reporting currency value of an entry, positive for debits."""
    amount = Money(entry.amount, entry.rate).reporting_amount
    return amount if entry.entry_type == BalanceType.DEBIT else -amount


class LedgerService:
    """Aggregates ledger postings into account movements."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def movement(self, account: Account, start_date: date, end_date: date) -> Decimal:
        """Net debits minus credits posted to an account between two dates.

        Both bounds are inclusive and every entry is converted at its own rate.
        """
        entries = self.db.list_ledger_entries(
            account_id=account.id, start_date=start_date, end_date=end_date
        )
        total = sum((signed_amount(entry) for entry in entries), Decimal("0"))
        logger.debug(
            "Movement of account %s from %s to %s: %s", account.id, start_date, end_date, total
        )
        return total

    def transaction_totals(self, transaction_id: int) -> tuple[Decimal, Decimal]:
        """Sum of debit and credit postings of a transaction, in posting currency."""
        debits = Decimal("0")
        credits = Decimal("0")
        for entry in self.db.list_ledger_entries(transaction_id=transaction_id):
            if entry.entry_type == BalanceType.DEBIT:
                debits += entry.amount
            else:
                credits += entry.amount
        return debits, credits
