"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from moneyboard.domain.entities import (
    Category,
    Transaction,
    TransactionCandidate,
    Mapping,
    ImportHistory,
)


class Database(ABC):
    """Abstract database interface for moneyboard.

    Every mutating method commits on its own unless it runs inside
    ``unit_of_work()``, in which case all changes are committed together
    when the block exits, or rolled back if it raises.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Group several writes into one all-or-nothing commit.

        Raises:
            PersistenceError: If the commit fails; nothing is persisted
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, color_hex: Optional[str] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name, ignoring case."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category row."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transactions(self, candidates: Iterable[TransactionCandidate]) -> int:
        """Insert a batch of transactions. Returns number inserted."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
        usage_name: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            year: Optional year filter (requires month)
            month: Optional month filter (requires year)
            category_id: Optional category ID filter
            uncategorized: If True, only return transactions without a category
            usage_name: Optional exact usage name filter
        """
        pass

    @abstractmethod
    def list_transaction_months(self) -> list[tuple[int, int]]:
        """List distinct (year, month) periods that have transactions."""
        pass

    @abstractmethod
    def update_usage_name_category(self, usage_name: str, category_id: Optional[int]) -> int:
        """Set the category of every transaction with a usage name. Returns count."""
        pass

    @abstractmethod
    def uncategorize_transactions(self, category_id: int) -> int:
        """Clear the category of every transaction in a category. Returns count."""
        pass

    @abstractmethod
    def delete_transactions_in_month(self, year: int, month: int) -> int:
        """Delete every transaction dated in a month. Returns count."""
        pass

    # Mapping operations
    @abstractmethod
    def create_mapping(self, usage_name: str, category_id: int) -> int:
        """Create a mapping. Returns mapping ID."""
        pass

    @abstractmethod
    def get_mapping(self, usage_name: str) -> Optional[Mapping]:
        """Get mapping by usage name."""
        pass

    @abstractmethod
    def list_mappings(self) -> list[Mapping]:
        """List all mappings ordered by usage name."""
        pass

    @abstractmethod
    def update_mapping_category(self, mapping_id: int, category_id: int) -> None:
        """Point an existing mapping at another category."""
        pass

    @abstractmethod
    def delete_mappings_for_category(self, category_id: int) -> int:
        """Delete every mapping that points at a category. Returns count."""
        pass

    # Import history operations
    @abstractmethod
    def get_import_history(self, year: int, month: int) -> Optional[ImportHistory]:
        """Get the import history record of a month."""
        pass

    @abstractmethod
    def list_import_history(self) -> list[ImportHistory]:
        """List import history records, newest period first."""
        pass

    @abstractmethod
    def create_import_history(
        self,
        year: int,
        month: int,
        file_hash: str,
        transaction_count: int,
        imported_at: Optional[datetime] = None,
    ) -> int:
        """Create an import history record. Returns record ID."""
        pass

    @abstractmethod
    def delete_import_history(self, history_id: int) -> None:
        """Delete an import history record."""
        pass
