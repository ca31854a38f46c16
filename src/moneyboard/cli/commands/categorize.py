"""Category assignment commands."""

import click
from moneyboard.cli.error_handling import handle_domain_error
from moneyboard.domain.categorization import CategorizationService
from moneyboard.domain.category import CategoryService
from moneyboard.domain.errors import DomainError


@click.command("assign")
@click.argument("usage_name")
@click.argument("category")
@click.pass_context
def assign_category(ctx, usage_name: str, category: str):
    """Assign a category to every transaction with a usage name.

    The assignment is remembered and applied to future imports.

    Examples:
        moneyboard assign "COFFEE SHOP" Food
        moneyboard assign "COFFEE SHOP" 3
    """
    db = ctx.obj["db"]
    service = CategorizationService(db)
    category_service = CategoryService(db)

    try:
        cat = category_service.resolve_category(category)
        updated = service.assign_category(usage_name, cat.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"'{usage_name}' categorized as '{cat.name}' ({updated} transactions updated)")


@click.command("usage-names")
@click.option("--all", "show_all", is_flag=True, help="Include usage names that already have a category")
@click.pass_context
def list_usage_names(ctx, show_all: bool):
    """List usage names waiting for a category."""
    db = ctx.obj["db"]
    service = CategorizationService(db)

    overviews = service.list_usage_names(only_uncategorized=not show_all)
    if not overviews:
        click.echo("No uncategorized usage names." if not show_all else "No transactions found.")
        return

    for overview in overviews:
        if overview.is_categorized:
            click.echo(f"{overview.usage_name} -> {overview.category_name} ({overview.transaction_count})")
        else:
            click.echo(f"{overview.usage_name} ({overview.transaction_count})")


@click.command("rules")
@click.pass_context
def list_rules(ctx):
    """List learned usage name rules."""
    db = ctx.obj["db"]
    service = CategorizationService(db)
    categories = {c.id: c.name for c in CategoryService(db).list_categories()}

    mappings = service.list_mappings()
    if not mappings:
        click.echo("No rules learned yet.")
        return

    for mapping in mappings:
        click.echo(f"{mapping.usage_name} -> {categories.get(mapping.category_id, 'Unknown')}")


def register_commands(cli):
    """Register categorization commands with main CLI."""
    cli.add_command(assign_category)
    cli.add_command(list_usage_names)
    cli.add_command(list_rules)
