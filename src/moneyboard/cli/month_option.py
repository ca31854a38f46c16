"""CLI helpers for month resolution."""

import click

from moneyboard.utils.date_parser import parse_month


def resolve_cli_month(ctx, month: str | None, default: tuple[int, int] | None = None) -> tuple[int, int] | None:
    """Resolve a --month option value to a (year, month) tuple.

    Falls back to ``default`` when no month was given.
    """
    if not month:
        return default

    try:
        return parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)
