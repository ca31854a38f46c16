"""Category domain service."""

import logging
import re
from typing import Optional

from moneyboard.database.base import Database
from moneyboard.domain.entities import Category as CategoryEntity
from moneyboard.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    duplicate_category_name,
)

logger = logging.getLogger(__name__)

_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

# Default category palette
DEFAULT_CATEGORIES = [
    ("Food", "#FF6B6B"),
    ("Convenience Store", "#FF9500"),
    ("Housing", "#4ECDC4"),
    ("Utilities", "#FFD93D"),
    ("Transportation", "#6BCF7F"),
    ("Communication", "#95E1D3"),
    ("Medical", "#E63946"),
    ("Clothing", "#B565D8"),
    ("Entertainment", "#FF9FF3"),
    ("Social", "#FFB6C1"),
    ("Beauty", "#DDA0DD"),
    ("Daily Necessities", "#87CEEB"),
    ("Other", "#A9A9A9"),
]


def normalize_color(color_hex: Optional[str]) -> Optional[str]:
    """Validate a #RRGGBB color and return it uppercased.

    Raises:
        ValidationError: If the color is not in #RRGGBB form
    """
    if color_hex is None:
        return None
    color_hex = color_hex.strip()
    if not _COLOR_PATTERN.match(color_hex):
        raise ValidationError(f"Invalid color '{color_hex}': expected #RRGGBB")
    return color_hex.upper()


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, color_hex: Optional[str] = None) -> int:
        """Create a category.

        Args:
            name: Category name, unique ignoring case
            color_hex: Optional display color in #RRGGBB form

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank or the color is malformed
            ConflictError: If a category with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name must not be empty")

        color_hex = normalize_color(color_hex)

        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_category_name(name))

        category_id = self.db.create_category(name=name, color_hex=color_hex)
        logger.info("Created category '%s' (ID: %d)", name, category_id)
        return category_id

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[CategoryEntity]:
        """Get category by name, ignoring case."""
        return self.db.get_category_by_name(name)

    def resolve_category(self, category: str | int) -> CategoryEntity:
        """Resolve a category name or ID to a category.

        Args:
            category: Category name, ID, or string representation of an ID

        Returns:
            Category entity

        Raises:
            NotFoundError: If no category matches
        """
        if isinstance(category, int):
            found = self.db.get_category(category)
            if found is None:
                raise NotFoundError(category_not_found(category))
            return found

        found = self.db.get_category_by_name(category)
        if found is not None:
            return found

        # Fall back to treating the string as an ID
        try:
            category_id = int(category)
        except (ValueError, TypeError):
            raise NotFoundError(f"Category '{category}' not found")
        found = self.db.get_category(category_id)
        if found is None:
            raise NotFoundError(category_not_found(category_id))
        return found

    def list_categories(self) -> list[CategoryEntity]:
        """List categories ordered by name."""
        return self.db.list_categories()

    def delete_category(self, category_id: int) -> dict[str, int]:
        """Delete a category and detach everything that depends on it.

        Transactions in the category become uncategorized and mappings that
        point at it are removed. All three steps commit together.

        Returns:
            Dict with counts of "uncategorized" transactions and "mappings_deleted"

        Raises:
            NotFoundError: If the category doesn't exist
            PersistenceError: If the cascade could not be committed
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))

        with self.db.unit_of_work():
            uncategorized = self.db.uncategorize_transactions(category_id)
            mappings_deleted = self.db.delete_mappings_for_category(category_id)
            self.db.delete_category(category_id)

        logger.info(
            "Deleted category '%s': %d transactions uncategorized, %d mappings removed",
            category.name,
            uncategorized,
            mappings_deleted,
        )
        return {"uncategorized": uncategorized, "mappings_deleted": mappings_deleted}

    def initialize_defaults(self) -> int:
        """Create the default categories if no category exists yet.

        Returns:
            Number of categories created (0 when categories already exist)
        """
        if self.db.list_categories():
            return 0

        with self.db.unit_of_work():
            for name, color_hex in DEFAULT_CATEGORIES:
                self.db.create_category(name=name, color_hex=color_hex)

        logger.info("Created %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
