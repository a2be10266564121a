"""Opening balance commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.context import get_context
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService, BalanceService
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_positive_amount


@click.group()
def balance_group():
    """Manage opening balances."""
    pass


@balance_group.command("set")
@click.argument("account", metavar="ACCOUNT")
@click.argument("year", type=int)
@click.argument("amount")
@click.option(
    "--side",
    type=click.Choice(["debit", "credit"], case_sensitive=False),
    default="debit",
    help="Balance side (default: debit)",
)
@click.option("--rate-id", "exchange_rate_id", type=int, help="Exchange rate ID (default: latest at period start)")
@click.pass_context
def set_balance(ctx, account: str, year: int, amount: str, side: str, exchange_rate_id: int | None):
    """Record the opening balance of ACCOUNT for reporting YEAR.

    Examples:
        ledgerkit balance set 501 2024 1000
        ledgerkit balance set "Clients" 2024 250.50 --side credit
    """
    context = get_context(ctx)
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), context, account)

    try:
        value = parse_positive_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        balance_id = BalanceService(db).create_balance(
            context, account_id, year, value, side, exchange_rate_id=exchange_rate_id
        )
        click.echo(f"Recorded {side.lower()} opening balance of {value} for {year} (ID: {balance_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(balance_group, name="balance")
