"""Category management commands."""

import click
from moneyboard.cli.error_handling import handle_domain_error
from moneyboard.domain.category import CategoryService
from moneyboard.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        color = cat.color_hex or "-"
        click.echo(f"  {cat.name:<30} {color:<8} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--color", help="Display color in #RRGGBB form (e.g., '#FF6B6B')")
@click.pass_context
def create_category(ctx, name: str, color: str | None):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(name=name, color_hex=color)
        click.echo(f"Created category '{name.strip()}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category")
@click.option("--yes", "-y", is_flag=True, help="Delete without asking")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a category.

    Transactions in the category become uncategorized and learned rules
    pointing at it are removed.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        cat = service.resolve_category(category)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete category '{cat.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        counts = service.delete_category(cat.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted category '{cat.name}'")
    click.echo(f"  Uncategorized: {counts['uncategorized']} transactions")
    click.echo(f"  Removed: {counts['mappings_deleted']} rules")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
