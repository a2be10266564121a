"""CLI helper turning account references into IDs."""

from __future__ import annotations

import click
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import LedgerContext
from ledgerkit.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context,
    account_service: AccountService,
    context: LedgerContext,
    reference: str | int,
) -> int:
    """Look up an account of the context entity by code, name or ID.

    Prints the lookup failure and exits 1 when nothing matches.
    """
    try:
        return resolve_account(account_service, context, reference)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
