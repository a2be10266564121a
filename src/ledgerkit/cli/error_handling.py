"""CLI error handling helpers."""

import logging

import click

from ledgerkit.domain.errors import DomainError, MissingContext, PeriodNotFound

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a domain error with a follow-up hint where one applies, then exit 1."""
    logger.debug("Command %s failed", ctx.info_name, exc_info=error)
    click.echo(f"Error: {error}", err=True)

    if isinstance(error, PeriodNotFound) and error.year is not None:
        click.echo(f"Create it with: ledgerkit period create {error.year}", err=True)
    elif isinstance(error, MissingContext):
        click.echo("See: ledgerkit entity list", err=True)
    ctx.exit(1)
