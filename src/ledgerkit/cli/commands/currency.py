"""Currency and exchange rate commands."""

import click
from ledgerkit.cli.context import get_context
from ledgerkit.cli.date_filters import parse_cli_date
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.currency import CurrencyService, ExchangeRateService
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_positive_amount


@click.group()
def currency_group():
    """Manage currencies and exchange rates."""
    pass


@currency_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.pass_context
def create_currency(ctx, code: str, name: str):
    """Create a currency.

    Examples:
        ledgerkit currency create EUR Euro
    """
    context = get_context(ctx)
    service = CurrencyService(ctx.obj["db"])

    try:
        currency_id = service.create_currency(context, code, name)
        click.echo(f"Created currency {code.upper()} (ID: {currency_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@currency_group.command("list")
@click.pass_context
def list_currencies(ctx):
    """List currencies of the entity."""
    context = get_context(ctx)
    service = CurrencyService(ctx.obj["db"])

    currencies = service.list_currencies(context)
    if not currencies:
        click.echo("No currencies found.")
        return

    click.echo("\nCurrencies:")
    click.echo("-" * 60)
    for cur in currencies:
        home = " (home)" if cur.id == context.currency_id else ""
        click.echo(f"ID: {cur.id:3d} | {cur.currency_code} | {cur.name}{home}")


@currency_group.command("rate")
@click.argument("code", metavar="CODE")
@click.argument("rate", metavar="RATE")
@click.option("--date", "valid_from", help="Date the rate applies from (default: today)")
@click.pass_context
def add_rate(ctx, code: str, rate: str, valid_from: str | None):
    """Record an exchange rate for a currency.

    RATE is the number of currency units per unit of the reporting currency.

    Examples:
        ledgerkit currency rate EUR 1.25 --date 2024-01-01
    """
    context = get_context(ctx)
    db = ctx.obj["db"]

    try:
        rate_value = parse_positive_amount(rate)
    except ValueError as e:
        click.echo(f"Error: Invalid rate: {e}", err=True)
        ctx.exit(1)

    day = parse_cli_date(ctx, valid_from, "date", context.today) or context.today

    try:
        currency = CurrencyService(db).get_currency_by_code(context, code)
        rate_id = ExchangeRateService(db).add_rate(currency.id, rate_value, day)
        click.echo(f"Recorded rate {rate_value} for {currency.currency_code} from {day} (ID: {rate_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register currency commands with main CLI."""
    cli.add_command(currency_group, name="currency")
