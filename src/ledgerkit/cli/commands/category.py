"""Category management commands."""

import click
from ledgerkit.cli.context import get_context
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.category import CategoryService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.labels import DEFAULT_LABELS

ACCOUNT_TYPE_CHOICE = click.Choice([t.value for t in AccountType], case_sensitive=False)


@click.group()
def category_group():
    """Manage account categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=ACCOUNT_TYPE_CHOICE, help="Only list categories of this account type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories grouped by account type."""
    context = get_context(ctx)
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(context, category_type)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    current_type = None
    for cat in sorted(categories, key=lambda c: (list(AccountType).index(c.category_type), c.name)):
        if cat.category_type != current_type:
            current_type = cat.category_type
            click.echo(DEFAULT_LABELS.get_type(current_type))
        click.echo(f"  {cat.name} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=ACCOUNT_TYPE_CHOICE, required=True, help="Account type grouped by the category")
@click.pass_context
def create_category(ctx, name: str, category_type: str):
    """Create a new category.

    Examples:
        ledgerkit category create "Trade Debtors" --type RECEIVABLE
    """
    context = get_context(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(context, name, category_type)
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
