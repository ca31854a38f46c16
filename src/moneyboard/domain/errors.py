"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class ImportWindowError(ValidationError):
    """Statement contains rows dated outside the allowed import window."""

    def __init__(self, year: int, month: int, offending_months: list[tuple[int, int]]):
        self.year = year
        self.month = month
        self.offending_months = sorted(set(offending_months))
        super().__init__(import_window_violation(year, month, self.offending_months))


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PersistenceError(DomainError):
    """A unit of work failed to commit and was rolled back."""


def format_period(year: int, month: int) -> str:
    """Render a (year, month) pair as YYYY-MM."""
    return f"{year:04d}-{month:02d}"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def duplicate_category_name(name: str) -> str:
    """Return message for a category name that is already taken."""
    return f"Category with name '{name}' already exists"


def invalid_month(year: int, month: int) -> str:
    """Return message for an impossible target period."""
    return f"Invalid month {year}-{month}: month must be between 1 and 12"


def import_window_violation(
    year: int, month: int, offending_months: list[tuple[int, int]]
) -> str:
    """Return message when a statement spans unexpected months."""
    months = ", ".join(format_period(y, m) for y, m in offending_months)
    return (
        f"Statement for {format_period(year, month)} contains transactions outside "
        f"the selected month and the month before it: {months}"
    )
