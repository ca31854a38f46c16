"""Transaction listing commands."""

import click
from moneyboard.cli.month_option import resolve_cli_month
from moneyboard.domain.category import CategoryService
from moneyboard.domain.transaction import TransactionService


@click.command("transactions")
@click.option("--month", "month_str", help="Only show this month (YYYY-MM)")
@click.option("--uncategorized", is_flag=True, help="Show only uncategorized transactions")
@click.option("--usage-name", help="Only show transactions with this usage name")
@click.pass_context
def list_transactions(ctx, month_str: str | None, uncategorized: bool, usage_name: str | None):
    """View transactions with optional filters."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    categories = {c.id: c.name for c in CategoryService(db).list_categories()}

    period = resolve_cli_month(ctx, month_str)
    year, month = period if period is not None else (None, None)

    transactions = service.list_transactions(
        year=year, month=month, uncategorized=uncategorized, usage_name=usage_name
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':>12}  {'Category':<20} {'Usage name':<46}")
    click.echo("-" * 100)
    for txn in transactions:
        category_name = categories.get(txn.category_id, "") if txn.category_id else ""
        click.echo(
            f"{txn.id:<6} {str(txn.usage_date):<12} {txn.amount:>12,}  "
            f"{category_name[:20]:<20} {txn.usage_name[:46]:<46}"
        )

    total = sum(txn.amount for txn in transactions)
    click.echo("-" * 100)
    click.echo(f"{'TOTAL':<6} {'':<12} {total:>12,}  Count: {len(transactions)}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(list_transactions)
