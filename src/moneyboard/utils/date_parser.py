"""Date parsing utilities."""

import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_MONTH_PATTERN = re.compile(r"^\s*(\d{4})\s*(?:[-/.年])\s*(\d{1,2})\s*月?\s*$")
_CJK_DATE_PATTERN = re.compile(r"^(\d{4})\s*年\s*(\d{1,2})\s*月\s*(\d{1,2})\s*日?$")

# Two defaults that differ in year, month and day; a field dateutil had to
# fill in shows up as a difference between the two results.
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_date(date_str: str, date_format: Optional[str] = None) -> date:
    """Parse a statement date string into a date object.

    Statement exports write dates in several ways ("2024/03/15",
    "2024-03-15", "2024年3月15日", "Mar 15 2024"). When ``date_format`` is
    given it is used as a strict ``strptime`` format; otherwise the string
    is parsed flexibly. Year, month and day must all be present.

    Args:
        date_str: Date string from a statement row
        date_format: Optional strptime format

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed or is incomplete
    """
    if date_str is None or not date_str.strip():
        raise ValueError("Empty date string")

    date_str = date_str.strip()

    if date_format is not None:
        try:
            return datetime.strptime(date_str, date_format).date()
        except ValueError as e:
            raise ValueError(f"Could not parse date '{date_str}' with format '{date_format}': {e}")

    match = _CJK_DATE_PATTERN.match(date_str)
    text = "/".join(match.groups()) if match else date_str

    try:
        first, second = (date_parser.parse(text, default=d).date() for d in _FILL_DEFAULTS)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    if first != second:
        raise ValueError(f"Could not parse date '{date_str}': year, month and day are required")
    return first


def parse_month(month_str: str) -> tuple[int, int]:
    """Parse a month string into a (year, month) tuple.

    Accepts "2024-03", "2024/3", "2024.03" and "2024年03月".

    Raises:
        ValueError: If the string is not a valid month
    """
    match = _MONTH_PATTERN.match(month_str or "")
    if match is None:
        raise ValueError(f"Could not parse month '{month_str}': expected YYYY-MM")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Could not parse month '{month_str}': month must be between 1 and 12")
    return (year, month)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return the calendar month before (year, month), rolling over at January."""
    prev = date(year, month, 1) - relativedelta(months=1)
    return (prev.year, prev.month)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    start = date(year, month, 1)
    end = start + relativedelta(months=1, days=-1)
    return (start, end)
