"""Entity management commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entity import EntityService
from ledgerkit.domain.errors import DomainError


@click.group()
def entity_group():
    """Manage reporting entities."""
    pass


@entity_group.command("create")
@click.argument("name", metavar="ENTITY_NAME")
@click.option("--currency", "currency_code", default="USD", help="Home currency code (default: USD)")
@click.option("--currency-name", default="US Dollar", help="Home currency name")
@click.option("--year-start", type=click.IntRange(1, 12), default=1, help="Month the fiscal year starts (default: 1)")
@click.pass_context
def create_entity(ctx, name: str, currency_code: str, currency_name: str, year_start: int):
    """Create a new reporting entity with its home currency.

    Examples:
        ledgerkit entity create "Acme Ltd"
        ledgerkit entity create "Acme Ltd" --currency EUR --currency-name Euro --year-start 4
    """
    service = EntityService(ctx.obj["db"])

    try:
        entity_id = service.create_entity(
            name=name,
            currency_code=currency_code,
            currency_name=currency_name,
            year_start=year_start,
        )
        click.echo(f"Created entity '{name}' (ID: {entity_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@entity_group.command("list")
@click.pass_context
def list_entities(ctx):
    """List all entities."""
    service = EntityService(ctx.obj["db"])

    entities = service.list_entities()
    if not entities:
        click.echo("No entities found.")
        return

    click.echo("\nEntities:")
    click.echo("-" * 60)
    for ent in entities:
        click.echo(f"ID: {ent.id:3d} | {ent.name:30s} | Year start: {ent.year_start:2d}")


def register_commands(cli):
    """Register entity commands with main CLI."""
    cli.add_command(entity_group, name="entity")
