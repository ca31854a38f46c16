"""Amount parsing utilities."""

import re

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into an integer in minor currency units.

    Statement amounts are whole numbers ("1200", "-350", "+80"). Anything
    else, including decimals and thousands separators, is rejected so that
    a malformed row is reported instead of silently rounded.

    Args:
        amount_str: Amount string

    Returns:
        Integer amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    if not _INTEGER_PATTERN.match(amount_str):
        raise ValueError(f"Could not parse amount '{amount_str}': not an integer")

    return int(amount_str)
