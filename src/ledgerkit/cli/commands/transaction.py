"""Transaction posting and clearing commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.context import get_context
from ledgerkit.cli.date_filters import parse_cli_date, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.clearing import ClearingService
from ledgerkit.domain.entities import TransactionType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.labels import DEFAULT_LABELS
from ledgerkit.domain.transaction import NewLineItem, TransactionService
from ledgerkit.utils.amount_parser import parse_positive_amount


@click.group()
def transaction_group():
    """Post and clear transactions."""
    pass


@transaction_group.command("post")
@click.argument(
    "transaction_type",
    metavar="TYPE",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
)
@click.argument("account", metavar="ACCOUNT")
@click.option(
    "--line",
    "lines",
    multiple=True,
    required=True,
    help="Line item as ACCOUNT=AMOUNT (repeatable)",
)
@click.option("--date", "txn_date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--credited/--debited", default=None, help="Side of the main account (default depends on TYPE)")
@click.option("--narration", help="Transaction narration")
@click.option("--reference", help="Reference number")
@click.pass_context
def post_transaction(
    ctx,
    transaction_type: str,
    account: str,
    lines: tuple[str, ...],
    txn_date: str | None,
    credited: bool | None,
    narration: str | None,
    reference: str | None,
) -> None:
    """Post a transaction against a main ACCOUNT.

    Each line posts its amount to the line account and the opposite side of
    the main account.

    Examples:
        ledgerkit transaction post IN "Clients" --line "Sales=500" --date 2024-03-01
        ledgerkit transaction post RC "Clients" --line "Main bank=200"
    """
    context = get_context(ctx)
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = TransactionService(db)

    account_id = resolve_account_or_exit(ctx, account_service, context, account)
    day = parse_cli_date(ctx, txn_date, "date", context.today) or context.today

    line_items = []
    for line in lines:
        if "=" not in line:
            click.echo(f"Error: Invalid line '{line}', expected ACCOUNT=AMOUNT", err=True)
            ctx.exit(1)
        line_account, amount = line.rsplit("=", 1)
        try:
            value = parse_positive_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
        line_account_id = resolve_account_or_exit(ctx, account_service, context, line_account)
        line_items.append(NewLineItem(account_id=line_account_id, amount=value))

    try:
        transaction_id = service.post_transaction(
            context,
            transaction_type=transaction_type,
            transaction_date=day,
            account_id=account_id,
            lines=line_items,
            credited=credited,
            narration=narration,
            reference=reference,
        )
        label = DEFAULT_LABELS.get_transaction_type(transaction_type)
        click.echo(f"Posted {label} on {day} (ID: {transaction_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--account", help="Main account code, name or ID")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, account: str | None):
    """List transactions with optional filters."""
    context = get_context(ctx)
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = TransactionService(db)
    clearing = ClearingService(db)

    start, end = resolve_cli_date_range(ctx, context, start_date=start_date, end_date=end_date)
    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, account_service, context, account)

    transactions = service.list_transactions(
        context, account_id=account_id, start_date=start, end_date=end
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {
        acc.id: acc.name for acc in account_service.list_accounts(context, include_deleted=True)
    }

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<4} {'Amount':>14} {'Account':<25} {'Status':<8}")
    click.echo("-" * 90)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {str(txn.transaction_date):<12} {txn.transaction_type.value:<4} "
            f"{txn.amount:>14,.2f} {accounts.get(txn.account_id, 'Unknown'):<25} "
            f"{clearing.status(txn.id).value:<8}"
        )


@transaction_group.command("clear")
@click.argument("transaction_id", type=int)
@click.argument("cleared_id", type=int)
@click.argument("amount")
@click.option("--date", "assignment_date", help="Assignment date (default: today)")
@click.pass_context
def clear_transaction(
    ctx, transaction_id: int, cleared_id: int, amount: str, assignment_date: str | None
) -> None:
    """Clear AMOUNT of CLEARED_ID using TRANSACTION_ID.

    Examples:
        ledgerkit transaction clear 2 1 200
    """
    context = get_context(ctx)
    service = ClearingService(ctx.obj["db"])

    try:
        value = parse_positive_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    day = parse_cli_date(ctx, assignment_date, "date", context.today)

    try:
        service.clear(context, transaction_id, cleared_id, value, assignment_date=day)
        click.echo(f"Transaction {transaction_id} cleared {value} of transaction {cleared_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
