"""Chart of accounts aggregation for report sections."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import (
    AccountSnapshot,
    AccountType,
    LedgerContext,
    SectionBalances,
    SectionCategory,
)
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.labels import DEFAULT_LABELS, LabelConfig

logger = logging.getLogger(__name__)


class ChartOfAccountsService:
    """Groups account balances into report sections."""

    def __init__(self, db: Database, labels: LabelConfig = DEFAULT_LABELS):
        """Initialize chart of accounts service.

        Args:
            db: Database instance
            labels: Label tables used for uncategorised accounts
        """
        self.db = db
        self.labels = labels
        self.accounts = AccountService(db, labels)

    def section_balances(
        self,
        context: LedgerContext,
        account_types: Iterable[AccountType | str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> SectionBalances:
        """Chart of account section balances for the reporting period.

        Accounts with a zero closing balance are left out of both the
        category listings and the totals.

        Args:
            context: Ledger context
            account_types: Account types making up the section
            start_date: Start of the movement range (default: period start)
            end_date: End of the movement range (default: today)

        Returns:
            SectionBalances with categories in first-seen order
        """
        account_types = list(account_types)
        start, end, _ = self.accounts.periods.resolve_range(context, start_date, end_date)

        section_total = Decimal("0")
        grouped: dict[str, list[AccountSnapshot]] = {}
        totals: dict[str, Decimal] = {}

        for account in self.accounts.list_accounts(context, account_types=account_types):
            snapshot = self.accounts.snapshot(context, account, start, end)
            if snapshot.closing_balance == 0:
                continue

            section_key = snapshot.category_name or snapshot.type_label
            grouped.setdefault(section_key, []).append(snapshot)
            totals[section_key] = totals.get(section_key, Decimal("0")) + snapshot.closing_balance
            section_total += snapshot.closing_balance

        logger.debug(
            "Section %s from %s to %s totals %s", account_types, start, end, section_total
        )
        return SectionBalances(
            section_total=section_total,
            section_categories={
                name: SectionCategory(accounts=tuple(snapshots), total=totals[name])
                for name, snapshots in grouped.items()
            },
        )

    def movement(
        self,
        context: LedgerContext,
        account_types: Iterable[AccountType | str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        """Chart of account balances movement for the given period.

        Compares the section total from the period start to ``start_date``
        with the total from the period start to ``end_date``, returned with
        the sign flipped so that growth in credit-normal sections is positive.

        Raises:
            ValidationError: If ``start_date`` precedes the reporting period
                holding ``end_date``
        """
        account_types = list(account_types)
        start, end, _ = self.accounts.periods.resolve_range(context, start_date, end_date)
        period_start = self.accounts.periods.period_start(context, end)
        if start < period_start:
            raise ValidationError(
                f"Start date {start} must lie in the reporting period of end date {end}, "
                f"which starts on {period_start}"
            )

        opening = self.section_balances(context, account_types, period_start, start).section_total
        closing = self.section_balances(context, account_types, period_start, end).section_total
        return (closing - opening) * -1
