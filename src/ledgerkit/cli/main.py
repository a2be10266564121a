"""Main CLI entry point."""

import logging

import click
from ledgerkit.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    entity,
    currency,
    period,
    category,
    account,
    balance,
    transaction,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--entity",
    "entity_ref",
    help="Entity name or ID (defaults to the only entity)",
    envvar="LEDGERKIT_ENTITY",
)
@click.option(
    "--today",
    help="Date to treat as today, e.g. 2024-06-30",
    envvar="LEDGERKIT_TODAY",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="LEDGERKIT_LOG_LEVEL",
    help="Logging verbosity (default: WARNING)",
)
@click.pass_context
def cli(ctx, db_path: str | None, entity_ref: str | None, today: str | None, log_level: str):
    """ledgerkit - Double-entry bookkeeping ledger.

    Keep IFRS classified accounts, post transactions, clear receipts against
    invoices and report opening and closing balances per reporting period.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["entity"] = entity_ref
        ctx.obj["today"] = today
        ctx.call_on_close(db.disconnect)


# Register all commands
entity.register_commands(cli)
currency.register_commands(cli)
period.register_commands(cli)
category.register_commands(cli)
account.register_commands(cli)
balance.register_commands(cli)
transaction.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
