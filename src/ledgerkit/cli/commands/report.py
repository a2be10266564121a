"""Chart of accounts report commands."""

import click
from ledgerkit.cli.commands.category import ACCOUNT_TYPE_CHOICE
from ledgerkit.cli.context import get_context
from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.chart import ChartOfAccountsService
from ledgerkit.domain.errors import DomainError


@click.group()
def report_group():
    """Chart of accounts reports."""
    pass


@report_group.command("section")
@click.option("--type", "account_types", type=ACCOUNT_TYPE_CHOICE, multiple=True, required=True, help="Account type in the section (repeatable)")
@click.option("--start-date", help="Start of the movement range (default: period start)")
@click.option("--end-date", help="End of the movement range (default: today)")
@click.pass_context
def section_report(ctx, account_types: tuple[str, ...], start_date: str | None, end_date: str | None):
    """Show section balances grouped by category.

    Examples:
        ledgerkit report section --type RECEIVABLE --type BANK
    """
    context = get_context(ctx)
    service = ChartOfAccountsService(ctx.obj["db"])
    start, end = resolve_cli_date_range(ctx, context, start_date=start_date, end_date=end_date)

    try:
        section = service.section_balances(context, account_types, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not section.section_categories:
        click.echo("No balances found.")
        return

    click.echo("-" * 60)
    for name, category in section.section_categories.items():
        click.echo(name)
        for acc in category.accounts:
            click.echo(f"  {acc.code:5d} {acc.name:30s} {acc.closing_balance:>16,.2f}")
        click.echo(f"  {'Total ' + name:36s} {category.total:>16,.2f}")
    click.echo("-" * 60)
    click.echo(f"{'Section total':38s} {section.section_total:>16,.2f}")


@report_group.command("movement")
@click.option("--type", "account_types", type=ACCOUNT_TYPE_CHOICE, multiple=True, required=True, help="Account type in the section (repeatable)")
@click.option("--start-date", help="Start of the movement range (default: period start)")
@click.option("--end-date", help="End of the movement range (default: today)")
@click.pass_context
def movement_report(ctx, account_types: tuple[str, ...], start_date: str | None, end_date: str | None):
    """Show the movement of a section between two dates."""
    context = get_context(ctx)
    service = ChartOfAccountsService(ctx.obj["db"])
    start, end = resolve_cli_date_range(ctx, context, start_date=start_date, end_date=end_date)

    try:
        movement = service.movement(context, account_types, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Movement: {movement:,.2f}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
