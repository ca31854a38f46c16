"""Domain model entities for moneyboard.

These are pure data classes representing business concepts, independent of
database schema. Services hand these out instead of ORM objects so that the
reconciliation and summary logic never touches a live session.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, date
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Category:
    """Spending category domain entity."""

    id: int
    name: str
    color_hex: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Stored transaction domain entity."""

    id: int
    usage_date: date
    usage_name: str
    amount: int
    category_id: Optional[int]
    imported_at: datetime


@dataclass(frozen=True)
class Mapping:
    """Learned usage name to category rule."""

    id: int
    usage_name: str
    category_id: int


@dataclass(frozen=True)
class ImportHistory:
    """Record of the last import for one (year, month) period."""

    id: int
    year: int
    month: int
    file_hash: str
    imported_at: datetime
    transaction_count: int


@dataclass(frozen=True)
class TransactionCandidate:
    """A parsed statement row that has not been stored yet."""

    usage_date: date
    usage_name: str
    amount: int
    category_id: Optional[int] = None
    line_number: Optional[int] = None

    @property
    def period(self) -> tuple[int, int]:
        """Return the (year, month) this row belongs to."""
        return (self.usage_date.year, self.usage_date.month)

    def with_category(self, category_id: Optional[int]) -> "TransactionCandidate":
        """Return a copy of this candidate assigned to a category."""
        return replace(self, category_id=category_id)


@dataclass(frozen=True)
class ParseFailure:
    """A statement row that could not be turned into a candidate."""

    line_number: int
    line: str
    reason: str


@dataclass(frozen=True)
class ParseResult:
    """Output of parsing one statement document."""

    candidates: tuple[TransactionCandidate, ...] = ()
    failures: tuple[ParseFailure, ...] = ()

    @property
    def skipped(self) -> int:
        return len(self.failures)


class ImportStatus(str, Enum):
    """Terminal states of a statement import attempt."""

    IMPORTED = "imported"
    NO_OP = "no_op"
    OVERWRITE_REQUIRED = "overwrite_required"
    ABORTED = "aborted"
    OVERWRITTEN = "overwritten"


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a statement import attempt."""

    status: ImportStatus
    year: int
    month: int
    fingerprint: str
    imported: int = 0
    deleted: int = 0
    failures: tuple[ParseFailure, ...] = ()
    existing_history: Optional[ImportHistory] = None

    @property
    def changed(self) -> bool:
        """True when the import wrote anything to the database."""
        return self.status in (ImportStatus.IMPORTED, ImportStatus.OVERWRITTEN)


@dataclass(frozen=True)
class CategorySummary:
    """One row of a monthly category summary."""

    category_id: Optional[int]
    category_name: str
    color_hex: Optional[str]
    total_amount: int
    percentage: float


@dataclass(frozen=True)
class UsageNameOverview:
    """Distinct usage name with the category its transactions carry."""

    usage_name: str
    category_id: Optional[int]
    category_name: Optional[str]
    transaction_count: int

    @property
    def is_categorized(self) -> bool:
        return self.category_id is not None


@dataclass(frozen=True)
class CategoryDetail:
    """Transactions of one category within one month."""

    year: int
    month: int
    category_id: Optional[int]
    category_name: str
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)

    @property
    def total_amount(self) -> int:
        return sum(txn.amount for txn in self.transactions)
