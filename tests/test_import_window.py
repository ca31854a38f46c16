"""Tests for import window validation."""

import pytest
from datetime import date

from moneyboard.domain.entities import TransactionCandidate
from moneyboard.domain.errors import ImportWindowError, ValidationError
from moneyboard.domain.import_window import (
    allowed_months,
    find_offending_months,
    validate_import_window,
)


def _candidate(year, month, day=1):
    return TransactionCandidate(date(year, month, day), "SHOP", 100)


def test_allowed_months_regular():
    assert allowed_months(2024, 3) == {(2024, 3), (2024, 2)}


def test_allowed_months_january_rolls_over():
    """January's predecessor is December of the previous year."""
    assert allowed_months(2024, 1) == {(2024, 1), (2023, 12)}


@pytest.mark.parametrize("month", [0, 13, -1])
def test_allowed_months_rejects_invalid_month(month):
    with pytest.raises(ValidationError):
        allowed_months(2024, month)


def test_window_accepts_target_and_previous_month():
    candidates = [_candidate(2024, 2, 27), _candidate(2024, 3, 5)]

    validate_import_window(2024, 3, candidates)


def test_window_accepts_december_for_january():
    validate_import_window(2025, 1, [_candidate(2024, 12, 28), _candidate(2025, 1, 3)])


def test_window_rejects_and_reports_sorted_distinct_months():
    """Offending months are reported once each, in order."""
    candidates = [
        _candidate(2024, 5, 1),
        _candidate(2024, 3, 1),
        _candidate(2024, 1, 15),
        _candidate(2024, 5, 20),
        _candidate(2023, 12, 31),
    ]

    with pytest.raises(ImportWindowError) as excinfo:
        validate_import_window(2024, 3, candidates)

    assert excinfo.value.offending_months == [(2023, 12), (2024, 1), (2024, 5)]
    assert "2023-12, 2024-01, 2024-05" in str(excinfo.value)


def test_window_error_is_validation_error():
    with pytest.raises(ValidationError):
        validate_import_window(2024, 3, [_candidate(2024, 4, 1)])


def test_find_offending_months_empty_when_valid():
    assert find_offending_months(2024, 3, [_candidate(2024, 3, 1)]) == []
