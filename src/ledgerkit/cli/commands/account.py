"""Account management commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.commands.category import ACCOUNT_TYPE_CHOICE
from ledgerkit.cli.context import get_context
from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.currency import CurrencyService
from ledgerkit.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, required=True, help="Account type")
@click.option("--category", "category_id", type=int, help="Category ID")
@click.option("--currency", "currency_code", help="Currency code (defaults to the entity's home currency)")
@click.option("--code", type=int, help="Explicit account code (assigned automatically if omitted)")
@click.option("--description", help="Account description")
@click.pass_context
def create_account(
    ctx,
    name: str,
    account_type: str,
    category_id: int | None,
    currency_code: str | None,
    code: int | None,
    description: str | None,
):
    """Create a new account.

    The account code is assigned from the type's base code unless --code is given.

    Examples:
        ledgerkit account create "Main bank" --type BANK
        ledgerkit account create "Clients" --type RECEIVABLE --category 1
    """
    context = get_context(ctx)
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        currency_id = None
        if currency_code is not None:
            currency_id = CurrencyService(db).get_currency_by_code(context, currency_code).id
        account = service.create_account(
            context,
            name=name,
            account_type=account_type,
            currency_id=currency_id,
            category_id=category_id,
            code=code,
            description=description,
        )
        click.echo(f"Created account '{account.name}' with code {account.code} (ID: {account.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--type", "account_types", type=ACCOUNT_TYPE_CHOICE, multiple=True, help="Only list accounts of this type (repeatable)")
@click.option("--all", "include_deleted", is_flag=True, help="Include deleted accounts")
@click.pass_context
def list_accounts(ctx, account_types: tuple[str, ...], include_deleted: bool):
    """List accounts."""
    context = get_context(ctx)
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(
        context, account_types=account_types or None, include_deleted=include_deleted
    )
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        deleted = " (deleted)" if not acc.is_active else ""
        click.echo(
            f"{acc.code:5d} | {acc.name:25s} | {service.get_type(acc.account_type)}{deleted}"
        )


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.option("--start-date", help="Start of the movement range (default: period start)")
@click.option("--end-date", help="End of the movement range (default: today)")
@click.pass_context
def account_balance(ctx, account: str, start_date: str | None, end_date: str | None):
    """Show opening, movement and closing balance of an account.

    ACCOUNT can be an account code, name or ID.

    Examples:
        ledgerkit account balance 501
        ledgerkit account balance "Main bank" --end-date 2024-06-30
    """
    context = get_context(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, context, account)
    start, end = resolve_cli_date_range(ctx, context, start_date=start_date, end_date=end_date)

    try:
        snapshot = service.snapshot(context, service.require_account(account_id, context), start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{snapshot.code} {snapshot.name} ({snapshot.type_label})")
    click.echo(f"  Opening:  {snapshot.opening_balance:>14,.2f}")
    click.echo(f"  Movement: {snapshot.current_balance:>14,.2f}")
    click.echo(f"  Closing:  {snapshot.closing_balance:>14,.2f}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account code, name or ID.

    The account can only be deleted once its closing balance is zero.

    Examples:
        ledgerkit account delete 501
        ledgerkit account delete "Main bank" --yes
    """
    context = get_context(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, context, account)
    account_obj = service.get_account(account_id)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (code: {account_obj.code})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(context, account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
