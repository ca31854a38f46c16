"""Summary commands."""

import click
from moneyboard.cli.error_handling import handle_domain_error
from moneyboard.cli.month_option import resolve_cli_month
from moneyboard.domain.category import CategoryService
from moneyboard.domain.errors import DomainError, format_period
from moneyboard.domain.summary import SummaryService


def format_amount(amount: int) -> str:
    """Format an amount in minor units with thousands separators."""
    return f"{amount:,}"


@click.command("summary")
@click.option("--month", "month_str", help="Month to summarize (YYYY-MM, default: latest month with data)")
@click.pass_context
def summary(ctx, month_str: str | None):
    """Show spending by category for a month."""
    db = ctx.obj["db"]
    service = SummaryService(db)

    period = resolve_cli_month(ctx, month_str, default=service.latest_month())
    if period is None:
        click.echo("No transactions found.")
        return
    year, month = period

    try:
        rows = service.monthly_summary(year, month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo(f"No transactions found for {format_period(year, month)}.")
        return

    click.echo(f"\nCategory Summary for {format_period(year, month)}:")
    click.echo("-" * 80)
    click.echo(f"{'Category':<40} {'Color':<8} {'Total':>18} {'Share':>10}")
    click.echo("-" * 80)

    for row in rows:
        color = row.color_hex or "-"
        click.echo(
            f"{row.category_name:<40} {color:<8} {format_amount(row.total_amount):>18} {row.percentage:>9.1f}%"
        )

    total = sum(row.total_amount for row in rows)
    click.echo("-" * 80)
    click.echo(f"{'TOTAL':<40} {'':<8} {format_amount(total):>18} {100.0:>9.1f}%")


@click.command("months")
@click.pass_context
def list_months(ctx):
    """List months that have transactions."""
    db = ctx.obj["db"]
    service = SummaryService(db)

    months = service.available_months()
    if not months:
        click.echo("No transactions found.")
        return

    for year, month in months:
        click.echo(format_period(year, month))


@click.command("detail")
@click.argument("category")
@click.option("--month", "month_str", help="Month (YYYY-MM, default: latest month with data)")
@click.pass_context
def category_detail(ctx, category: str, month_str: str | None):
    """Show the transactions of one category in a month.

    Use "Uncategorized" to show transactions without a category.
    """
    db = ctx.obj["db"]
    service = SummaryService(db)
    category_service = CategoryService(db)

    period = resolve_cli_month(ctx, month_str, default=service.latest_month())
    if period is None:
        click.echo("No transactions found.")
        return
    year, month = period

    try:
        category_id = None
        if category.lower() != "uncategorized":
            category_id = category_service.resolve_category(category).id
        detail = service.category_detail(year, month, category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not detail.transactions:
        click.echo(f"No transactions in '{detail.category_name}' for {format_period(year, month)}.")
        return

    click.echo(f"\n{detail.category_name} - {format_period(year, month)}:")
    click.echo("-" * 80)
    click.echo(f"{'Date':<12} {'Usage name':<48} {'Amount':>18}")
    click.echo("-" * 80)
    for txn in detail.transactions:
        click.echo(f"{str(txn.usage_date):<12} {txn.usage_name[:48]:<48} {format_amount(txn.amount):>18}")
    click.echo("-" * 80)
    click.echo(f"{'TOTAL':<12} {'':<48} {format_amount(detail.total_amount):>18}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(list_months)
    cli.add_command(category_detail)
