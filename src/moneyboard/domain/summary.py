"""Monthly summary domain service."""

from collections import defaultdict
from typing import Optional, Sequence, Any

from moneyboard.database.base import Database
from moneyboard.domain.entities import CategoryDetail, CategorySummary, Transaction
from moneyboard.domain.errors import NotFoundError, ValidationError, category_not_found, invalid_month

UNCATEGORIZED_NAME = "Uncategorized"


class SummaryService:
    """Service for building category summaries of a month."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def monthly_summary(self, year: int, month: int) -> list[CategorySummary]:
        """Summarize a month's transactions by category.

        Transactions without a category are grouped into an
        "Uncategorized" row. Rows are ordered by descending total, then by
        category name.

        Args:
            year: Year
            month: Month (1-12)

        Returns:
            Summary rows; empty when the month's total is zero
        """
        if not 1 <= month <= 12:
            raise ValidationError(invalid_month(year, month))

        transactions = self.db.list_transactions(year=year, month=month)
        category_index = {
            c.id: {"name": c.name, "color_hex": c.color_hex} for c in self.db.list_categories()
        }
        return self.build_summary(transactions, category_index)

    def build_summary(
        self,
        transactions: Sequence[Transaction],
        category_index: dict[int, dict[str, Any]],
    ) -> list[CategorySummary]:
        """Build summary rows from transactions and a category lookup."""
        period_total = sum(txn.amount for txn in transactions)
        if period_total == 0:
            return []

        totals = self.aggregate_by_category(transactions)

        results = []
        for category_id, total in totals.items():
            info = category_index.get(category_id, {}) if category_id is not None else {}
            results.append(
                CategorySummary(
                    category_id=category_id,
                    category_name=info.get("name") or UNCATEGORIZED_NAME,
                    color_hex=info.get("color_hex"),
                    total_amount=total,
                    percentage=total / period_total * 100,
                )
            )

        results.sort(key=lambda s: (-s.total_amount, s.category_name))
        return results

    def aggregate_by_category(
        self, transactions: Sequence[Transaction]
    ) -> dict[Optional[int], int]:
        """Sum transaction amounts per category ID (None for uncategorized)."""
        totals: dict[Optional[int], int] = defaultdict(int)
        for txn in transactions:
            totals[txn.category_id] += txn.amount
        return dict(totals)

    def available_months(self) -> list[tuple[int, int]]:
        """List months that have transactions, newest first."""
        return self.db.list_transaction_months()

    def latest_month(self) -> Optional[tuple[int, int]]:
        """Return the most recent month with transactions, if any."""
        months = self.available_months()
        return months[0] if months else None

    def category_detail(
        self, year: int, month: int, category_id: Optional[int]
    ) -> CategoryDetail:
        """Get the transactions behind one summary row.

        Args:
            year: Year
            month: Month (1-12)
            category_id: Category ID, or None for uncategorized transactions

        Returns:
            CategoryDetail with transactions ordered by date (newest first), then name

        Raises:
            NotFoundError: If the category doesn't exist
        """
        if category_id is None:
            category_name = UNCATEGORIZED_NAME
            transactions = self.db.list_transactions(year=year, month=month, uncategorized=True)
        else:
            category = self.db.get_category(category_id)
            if category is None:
                raise NotFoundError(category_not_found(category_id))
            category_name = category.name
            transactions = self.db.list_transactions(year=year, month=month, category_id=category_id)

        ordered = sorted(transactions, key=lambda t: t.usage_name)
        ordered.sort(key=lambda t: t.usage_date, reverse=True)
        return CategoryDetail(
            year=year,
            month=month,
            category_id=category_id,
            category_name=category_name,
            transactions=tuple(ordered),
        )
