"""Import window validation.

A statement imported for month M may only contain rows dated in M or in
the month before it. Card statements usually straddle a month boundary,
but anything further out means the wrong file or the wrong target month
was picked.
"""

from typing import Iterable

from moneyboard.domain.entities import TransactionCandidate
from moneyboard.domain.errors import ImportWindowError, ValidationError, invalid_month
from moneyboard.utils.date_parser import previous_month


def allowed_months(year: int, month: int) -> set[tuple[int, int]]:
    """Return the (year, month) pairs a statement for the target may contain."""
    if not 1 <= month <= 12:
        raise ValidationError(invalid_month(year, month))
    return {(year, month), previous_month(year, month)}


def find_offending_months(
    year: int, month: int, candidates: Iterable[TransactionCandidate]
) -> list[tuple[int, int]]:
    """Return the sorted distinct months of candidates outside the window."""
    allowed = allowed_months(year, month)
    return sorted({c.period for c in candidates if c.period not in allowed})


def validate_import_window(
    year: int, month: int, candidates: Iterable[TransactionCandidate]
) -> None:
    """Reject the whole batch if any candidate falls outside the window.

    Raises:
        ImportWindowError: If any candidate is dated outside the window
    """
    offending = find_offending_months(year, month, candidates)
    if offending:
        raise ImportWindowError(year, month, offending)
