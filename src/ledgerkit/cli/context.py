"""CLI helpers for building the ledger context."""

import click

from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import LedgerContext
from ledgerkit.domain.entity import EntityService
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.date_parser import parse_date


def get_context(ctx: click.Context) -> LedgerContext:
    """Build the ledger context for the selected entity, or exit."""
    db = ctx.obj["db"]
    service = EntityService(db)

    try:
        today = parse_date(ctx.obj["today"]) if ctx.obj.get("today") else None
        entity = service.resolve_entity(ctx.obj.get("entity"))
        return service.build_context(entity.id, today=today)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
