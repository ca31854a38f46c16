"""Initialize default categories."""

import click
from moneyboard.domain.category import CategoryService


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Initialize database with the default categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.initialize_defaults()
    if created == 0:
        click.echo("Categories already exist.")
        return

    click.echo(f"Successfully created {created} categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
