"""Statement import commands."""

import click
from moneyboard.cli.error_handling import handle_domain_error
from moneyboard.cli.month_option import resolve_cli_month
from moneyboard.domain.entities import ImportStatus
from moneyboard.domain.errors import DomainError, ImportWindowError, format_period
from moneyboard.domain.record_parser import DEFAULT_LAYOUT, StatementLayout
from moneyboard.domain.statement_import import StatementImportService


@click.command("import")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--month", "month_str", required=True, help="Month the statement belongs to (YYYY-MM)")
@click.option("--yes", "-y", is_flag=True, help="Overwrite a month imported with different content without asking")
@click.option("--delimiter", default=DEFAULT_LAYOUT.delimiter, show_default=True, help="Field delimiter")
@click.option("--date-column", type=int, default=DEFAULT_LAYOUT.date_column, show_default=True, help="Zero-based usage date column")
@click.option("--name-column", type=int, default=DEFAULT_LAYOUT.name_column, show_default=True, help="Zero-based usage name column")
@click.option("--amount-column", type=int, default=DEFAULT_LAYOUT.amount_column, show_default=True, help="Zero-based amount column")
@click.option("--min-columns", type=int, default=DEFAULT_LAYOUT.min_columns, show_default=True, help="Minimum number of columns per row")
@click.option("--date-format", default=None, help="strptime format of the date column (default: detect)")
@click.pass_context
def import_statement(
    ctx,
    statement_file: str,
    month_str: str,
    yes: bool,
    delimiter: str,
    date_column: int,
    name_column: int,
    amount_column: int,
    min_columns: int,
    date_format: str | None,
):
    """Import a statement export for a month.

    The statement may only contain transactions from the given month and
    the month before it.

    Examples:
        moneyboard import statement.csv --month 2024-03
        moneyboard import statement.tsv --month 2024-03 --delimiter $'\\t'
    """
    db = ctx.obj["db"]
    year, month = resolve_cli_month(ctx, month_str)
    period = format_period(year, month)

    try:
        layout = StatementLayout(
            delimiter=delimiter,
            date_column=date_column,
            name_column=name_column,
            amount_column=amount_column,
            min_columns=min_columns,
            date_format=date_format,
        )
        service = StatementImportService(db, layout=layout)

        def confirm(history) -> bool:
            if yes:
                return True
            return click.confirm(
                f"{period} was already imported with different content "
                f"({history.transaction_count} transactions on {history.imported_at:%Y-%m-%d %H:%M}). "
                "Overwrite it?"
            )

        result = service.import_file(statement_file, year, month, confirm_overwrite=confirm)
    except ImportWindowError as e:
        months = ", ".join(format_period(y, m) for y, m in e.offending_months)
        click.echo(
            f"Error: The statement contains transactions outside {period} and the month before it.",
            err=True,
        )
        click.echo(f"  Months found: {months}", err=True)
        ctx.exit(1)
    except (DomainError, ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    if result.status == ImportStatus.NO_OP:
        click.echo(f"{period} is already imported with identical content. Nothing to do.")
    elif result.status == ImportStatus.ABORTED:
        click.echo("Import cancelled.")
    elif result.status == ImportStatus.OVERWRITE_REQUIRED:
        click.echo(f"{period} is already imported with different content. Use --yes to overwrite.")
    else:
        verb = "Overwrote" if result.status == ImportStatus.OVERWRITTEN else "Imported"
        click.echo(f"\nImport complete:")
        click.echo(f"  {verb} {period}: {result.imported} transactions")
        if result.deleted:
            click.echo(f"  Replaced: {result.deleted} previously stored transactions")

    if result.failures:
        click.echo(f"  Skipped rows: {len(result.failures)}")
        for failure in result.failures:
            click.echo(f"    Row {failure.line_number}: {failure.reason}", err=True)


@click.command("history")
@click.pass_context
def import_history(ctx):
    """Show imported months."""
    db = ctx.obj["db"]
    service = StatementImportService(db)

    records = service.list_history()
    if not records:
        click.echo("No statements imported yet.")
        return

    click.echo(f"\n{'Month':<10} {'Transactions':>12}  {'Imported at':<20} Fingerprint")
    click.echo("-" * 100)
    for h in records:
        click.echo(
            f"{format_period(h.year, h.month):<10} {h.transaction_count:>12}  "
            f"{h.imported_at:%Y-%m-%d %H:%M:%S}  {h.file_hash[:16]}"
        )


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_statement)
    cli.add_command(import_history)
