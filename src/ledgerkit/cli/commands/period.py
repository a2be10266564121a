"""Reporting period commands."""

from datetime import date

import click
from ledgerkit.cli.context import get_context
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.period import ReportingPeriodService, period_end


@click.group()
def period_group():
    """Manage reporting periods."""
    pass


@period_group.command("create")
@click.argument("year", type=int)
@click.pass_context
def create_period(ctx, year: int):
    """Create the reporting period for a year."""
    context = get_context(ctx)
    service = ReportingPeriodService(ctx.obj["db"])

    try:
        period_id = service.create_period(context, year)
        click.echo(f"Created reporting period {year} (ID: {period_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@period_group.command("list")
@click.pass_context
def list_periods(ctx):
    """List reporting periods."""
    context = get_context(ctx)
    service = ReportingPeriodService(ctx.obj["db"])

    periods = service.list_periods(context)
    if not periods:
        click.echo("No reporting periods found.")
        return

    click.echo("\nReporting periods:")
    click.echo("-" * 60)
    for period in periods:
        start = date(period.calendar_year, context.year_start, 1)
        end = period_end(period.calendar_year, context.year_start)
        click.echo(
            f"{period.calendar_year} | {start} to {end} | {period.status.value}"
        )


@period_group.command("close")
@click.argument("year", type=int)
@click.pass_context
def close_period(ctx, year: int):
    """Close a reporting period to further postings."""
    context = get_context(ctx)
    service = ReportingPeriodService(ctx.obj["db"])

    try:
        service.close_period(context, year)
        click.echo(f"Closed reporting period {year}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@period_group.command("reopen")
@click.argument("year", type=int)
@click.pass_context
def reopen_period(ctx, year: int):
    """Reopen a closed reporting period."""
    context = get_context(ctx)
    service = ReportingPeriodService(ctx.obj["db"])

    try:
        service.reopen_period(context, year)
        click.echo(f"Reopened reporting period {year}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register period commands with main CLI."""
    cli.add_command(period_group, name="period")
