"""Reporting period domain service.

Reporting periods are contiguous twelve month windows. A period starts on the
first day of the entity's ``year_start`` month and is named after the calendar
year in which it starts.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import LedgerContext, PeriodStatus, ReportingPeriod
from ledgerkit.domain.errors import (
    ClosedReportingPeriod,
    ConflictError,
    PeriodNotFound,
    ValidationError,
    duplicate_period,
)

logger = logging.getLogger(__name__)


def period_year(day: date, year_start: int = 1) -> int:
    """Return the reporting year containing ``day``."""
    if day.month < year_start:
        return day.year - 1
    return day.year


def period_start(day: date, year_start: int = 1) -> date:
    """Return the first day of the reporting period containing ``day``."""
    return date(period_year(day, year_start), year_start, 1)


def period_end(year: int, year_start: int = 1) -> date:
    """Return the last day of the reporting period named ``year``."""
    return date(year, year_start, 1) + relativedelta(years=1) - timedelta(days=1)


def _validate_year_start(year_start: int) -> None:
    if not 1 <= year_start <= 12:
        raise ValidationError(f"Year start month must be between 1 and 12, got {year_start}")


class ReportingPeriodService:
    """Service resolving and managing reporting periods."""

    def __init__(self, db: Database):
        """Initialize reporting period service.

        Args:
            db: Database instance
        """
        self.db = db

    def period_start(self, context: LedgerContext, day: Optional[date] = None) -> date:
        """Start of the period containing ``day`` (default: context today)."""
        _validate_year_start(context.year_start)
        return period_start(day or context.today, context.year_start)

    def year(self, context: LedgerContext, day: Optional[date] = None) -> int:
        """Reporting year containing ``day`` (default: context today)."""
        _validate_year_start(context.year_start)
        return period_year(day or context.today, context.year_start)

    def reporting_year(self, context: LedgerContext) -> int:
        """Year of the context's current reporting period."""
        if context.current_year is not None:
            return context.current_year
        return self.year(context)

    def period_by_year(self, context: LedgerContext, year: int) -> ReportingPeriod:
        """Get the period of the context entity for ``year``.

        Raises:
            PeriodNotFound: If no such period exists
        """
        period = self.db.get_reporting_period_by_year(context.entity_id, year)
        if period is None:
            raise PeriodNotFound(year)
        return period

    def current_period(self, context: LedgerContext) -> ReportingPeriod:
        """Get the context's current reporting period."""
        return self.period_by_year(context, self.reporting_year(context))

    def resolve_range(
        self,
        context: LedgerContext,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> tuple[date, date, int]:
        """Apply the default date range rules.

        ``end_date`` defaults to today and ``start_date`` to the start of the
        period containing ``end_date``.

        Returns:
            (start_date, end_date, reporting year of end_date)
        """
        end = end_date if end_date is not None else context.today
        start = start_date if start_date is not None else self.period_start(context, end)
        if start > end:
            raise ValidationError(f"Start date {start} is after end date {end}")
        return start, end, self.year(context, end)

    def create_period(
        self,
        context: LedgerContext,
        year: int,
        status: PeriodStatus = PeriodStatus.OPEN,
    ) -> int:
        """Create a reporting period.

        Raises:
            ConflictError: If the entity already has a period for ``year``
        """
        if self.db.get_reporting_period_by_year(context.entity_id, year) is not None:
            raise ConflictError(duplicate_period(year))
        period_id = self.db.create_reporting_period(context.entity_id, year, status)
        logger.info("Created reporting period %s for entity %s", year, context.entity_id)
        return period_id

    def list_periods(self, context: LedgerContext) -> list[ReportingPeriod]:
        """List periods of the context entity."""
        return self.db.list_reporting_periods(context.entity_id)

    def close_period(self, context: LedgerContext, year: int) -> None:
        """Close a period so that no further postings are accepted."""
        period = self.period_by_year(context, year)
        self.db.update_reporting_period_status(period.id, PeriodStatus.CLOSED)
        logger.info("Closed reporting period %s for entity %s", year, context.entity_id)

    def reopen_period(self, context: LedgerContext, year: int) -> None:
        """Reopen a closed period."""
        period = self.period_by_year(context, year)
        self.db.update_reporting_period_status(period.id, PeriodStatus.OPEN)
        logger.info("Reopened reporting period %s for entity %s", year, context.entity_id)

    def ensure_open(self, context: LedgerContext, day: date) -> ReportingPeriod:
        """Get the open period containing ``day``.

        Raises:
            PeriodNotFound: If no period contains the date
            ClosedReportingPeriod: If the period is closed
        """
        period = self.period_by_year(context, self.year(context, day))
        if period.status == PeriodStatus.CLOSED:
            raise ClosedReportingPeriod(period.calendar_year)
        return period
