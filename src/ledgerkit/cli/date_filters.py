"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerkit.domain.entities import LedgerContext
from ledgerkit.utils.date_parser import parse_date


def parse_cli_date(ctx: click.Context, value: str | None, label: str, today: date) -> date | None:
    """Parse an optional CLI date, exiting on invalid input."""
    if not value:
        return None
    try:
        return parse_date(value, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    context: LedgerContext,
    *,
    start_date: str | None,
    end_date: str | None,
) -> tuple[date | None, date | None]:
    """Parse --start-date/--end-date, leaving defaults to the domain services."""
    start = parse_cli_date(ctx, start_date, "start date", context.today)
    end = parse_cli_date(ctx, end_date, "end date", context.today)

    if start is not None and end is not None and start > end:
        click.echo("Error: --start-date must not be after --end-date.", err=True)
        ctx.exit(1)

    return start, end
