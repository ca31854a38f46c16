"""Categorization domain service.

Holds the learned usage name to category rules. Rules are applied to
statement rows before they are stored, and a manual assignment both
recategorizes existing transactions and teaches the rule for future
imports.
"""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from moneyboard.database.base import Database
from moneyboard.domain.entities import Mapping, TransactionCandidate, UsageNameOverview
from moneyboard.domain.errors import NotFoundError, ValidationError, category_not_found

logger = logging.getLogger(__name__)


class CategorizationService:
    """Service for applying and learning usage name mappings."""

    def __init__(self, db: Database):
        """Initialize categorization service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_mapping_table(self) -> dict[str, int]:
        """Return the current mappings as a usage name to category ID dict."""
        return {m.usage_name: m.category_id for m in self.db.list_mappings()}

    def apply_mappings(
        self,
        candidates: Iterable[TransactionCandidate],
        mapping_table: Optional[dict[str, int]] = None,
    ) -> list[TransactionCandidate]:
        """Assign mapped categories to candidates.

        Candidates whose usage name has no mapping are returned
        uncategorized.

        Args:
            candidates: Parsed statement rows
            mapping_table: Optional preloaded mapping table

        Returns:
            New list of candidates with category IDs set where a rule exists
        """
        if mapping_table is None:
            mapping_table = self.get_mapping_table()

        result = [c.with_category(mapping_table.get(c.usage_name)) for c in candidates]
        matched = sum(1 for c in result if c.category_id is not None)
        logger.debug("Auto-categorized %d of %d transactions", matched, len(result))
        return result

    def assign_category(self, usage_name: str, category_id: int) -> int:
        """Assign a category to a usage name and remember the rule.

        Every stored transaction with the usage name moves to the category,
        and the mapping for the usage name is created or updated. Both
        changes commit together.

        Args:
            usage_name: Usage name to categorize
            category_id: Target category ID

        Returns:
            Number of transactions updated

        Raises:
            ValidationError: If the usage name is blank
            NotFoundError: If the category doesn't exist
            PersistenceError: If the changes could not be committed
        """
        usage_name = (usage_name or "").strip()
        if not usage_name:
            raise ValidationError("Usage name must not be empty")

        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))

        with self.db.unit_of_work():
            updated = self.db.update_usage_name_category(usage_name, category_id)
            self.upsert_mapping(usage_name, category_id)

        logger.info(
            "Assigned '%s' to category '%s' (%d transactions updated)",
            usage_name,
            category.name,
            updated,
        )
        return updated

    def upsert_mapping(self, usage_name: str, category_id: int) -> Mapping:
        """Create the mapping for a usage name, or repoint the existing one."""
        existing = self.db.get_mapping(usage_name)
        if existing is None:
            self.db.create_mapping(usage_name=usage_name, category_id=category_id)
        elif existing.category_id != category_id:
            self.db.update_mapping_category(existing.id, category_id)
        return self.db.get_mapping(usage_name)

    def list_mappings(self) -> list[Mapping]:
        """List all learned mappings."""
        return self.db.list_mappings()

    def list_usage_names(self, only_uncategorized: bool = True) -> list[UsageNameOverview]:
        """List distinct usage names with the category their transactions carry.

        A usage name counts as categorized when its first stored transaction
        has a category.

        Args:
            only_uncategorized: If True, only return uncategorized usage names

        Returns:
            Overviews sorted by usage name
        """
        categories = {c.id: c for c in self.db.list_categories()}
        transactions = sorted(self.db.list_transactions(), key=lambda t: t.id)

        groups: dict[str, list] = defaultdict(list)
        for txn in transactions:
            groups[txn.usage_name].append(txn)

        overviews = []
        for usage_name in sorted(groups):
            txns = groups[usage_name]
            category_id = txns[0].category_id
            if only_uncategorized and category_id is not None:
                continue
            category = categories.get(category_id) if category_id is not None else None
            overviews.append(
                UsageNameOverview(
                    usage_name=usage_name,
                    category_id=category_id,
                    category_name=category.name if category else None,
                    transaction_count=len(txns),
                )
            )
        return overviews
