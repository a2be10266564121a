"""Transaction clearing rules and assignments.

A clearing transaction (say a client receipt) offsets one or more cleared
transactions (client invoices). Which types may clear which is a fixed table
held by ``LabelConfig.clearables``.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    ClearingStatus,
    LedgerContext,
    TransactionType,
)
from ledgerkit.domain.errors import (
    OverClearance,
    UnclearableTransaction,
    ValidationError,
)
from ledgerkit.domain.labels import (
    DEFAULT_LABELS,
    LabelConfig,
    coerce_transaction_type,
)
from ledgerkit.domain.transaction import TransactionService

logger = logging.getLogger(__name__)


def validate_clearing(
    transaction_type: TransactionType | str,
    allowed_types: Iterable[TransactionType | str],
    labels: LabelConfig = DEFAULT_LABELS,
) -> None:
    """Check that a transaction of ``transaction_type`` may be cleared.

    Raises:
        UnclearableTransaction: If the type is not among ``allowed_types``
    """
    transaction_type = coerce_transaction_type(transaction_type)
    allowed = tuple(coerce_transaction_type(t) for t in allowed_types)
    if transaction_type not in allowed:
        raise UnclearableTransaction(transaction_type, allowed, labels)


class ClearingService:
    """Service recording clearing assignments between transactions."""

    def __init__(self, db: Database, labels: LabelConfig = DEFAULT_LABELS):
        """Initialize clearing service.

        Args:
            db: Database instance
            labels: Label and clearables tables
        """
        self.db = db
        self.labels = labels
        self.transactions = TransactionService(db, labels)

    def clear(
        self,
        context: LedgerContext,
        transaction_id: int,
        cleared_id: int,
        amount,
        assignment_date: Optional[date] = None,
    ) -> int:
        """Clear part or all of ``cleared_id`` with ``transaction_id``.

        Args:
            context: Ledger context
            transaction_id: Clearing transaction ID
            cleared_id: Transaction being cleared
            amount: Amount to clear
            assignment_date: Defaults to the context's today

        Returns:
            Assignment ID

        Raises:
            UnclearableTransaction: If the types are incompatible
            OverClearance: If the amount exceeds what is left on either side
            ValidationError: For self clearing, a clearing type that clears
                nothing, differing main accounts or a non-positive amount
            NotFoundError: If either transaction is missing from the entity
        """
        transaction = self.transactions.require_transaction(transaction_id, context)
        cleared = self.transactions.require_transaction(cleared_id, context)

        if transaction.id == cleared.id:
            raise ValidationError("A Transaction cannot clear itself")

        clearables = self.labels.clearable_types(transaction.transaction_type)
        if not clearables:
            raise ValidationError(
                f"{self.labels.get_transaction_type(transaction.transaction_type)} "
                "Transactions cannot clear other Transactions"
            )
        validate_clearing(cleared.transaction_type, clearables, self.labels)

        if transaction.account_id != cleared.account_id:
            raise ValidationError(
                "Clearing and cleared Transactions must share the same main account"
            )

        amount = Decimal(str(amount))
        if amount <= 0:
            raise ValidationError("Clearing amount must be greater than zero")

        unassigned = transaction.amount - self.assigned_amount(transaction.id)
        if amount > unassigned:
            raise OverClearance(amount, unassigned)
        uncleared = cleared.amount - self.cleared_amount(cleared.id)
        if amount > uncleared:
            raise OverClearance(amount, uncleared)

        assignment_id = self.db.create_assignment(
            transaction_id=transaction.id,
            cleared_id=cleared.id,
            amount=amount,
            assignment_date=assignment_date or context.today,
        )
        logger.info(
            "Transaction %s cleared %s of transaction %s", transaction.id, amount, cleared.id
        )
        return assignment_id

    def assigned_amount(self, transaction_id: int) -> Decimal:
        """Amount a transaction has used to clear others."""
        assignments = self.db.list_assignments(transaction_id=transaction_id)
        return sum((a.amount for a in assignments), Decimal("0"))

    def cleared_amount(self, transaction_id: int) -> Decimal:
        """Amount of a transaction cleared by others."""
        assignments = self.db.list_assignments(cleared_id=transaction_id)
        return sum((a.amount for a in assignments), Decimal("0"))

    def status(self, transaction_id: int) -> ClearingStatus:
        """OPEN while part of the transaction remains uncleared."""
        transaction = self.transactions.require_transaction(transaction_id)
        if self.cleared_amount(transaction.id) >= transaction.amount:
            return ClearingStatus.CLEARED
        return ClearingStatus.OPEN
