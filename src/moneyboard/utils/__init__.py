"""Utility functions for moneyboard."""

from moneyboard.utils.date_parser import parse_date, parse_month, previous_month, month_bounds
from moneyboard.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_month", "previous_month", "month_bounds", "parse_amount"]
