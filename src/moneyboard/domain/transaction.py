"""Transaction domain service."""

from typing import Optional

from moneyboard.database.base import Database
from moneyboard.domain.entities import Transaction as TransactionEntity


class TransactionService:
    """Service for reading stored transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
        usage_name: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters.

        Args:
            year: Optional year (used together with month)
            month: Optional month (used together with year)
            category_id: Optional category ID filter
            uncategorized: If True, only transactions without a category
            usage_name: Optional exact usage name

        Returns:
            List of transaction entities, newest first
        """
        if (year is None) != (month is None):
            raise ValueError("Year and month must be given together")

        return self.db.list_transactions(
            year=year,
            month=month,
            category_id=category_id,
            uncategorized=uncategorized,
            usage_name=usage_name,
        )

