"""Category domain service."""

import logging
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import AccountType, Category, LedgerContext
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.labels import coerce_account_type

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing account categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self, context: LedgerContext, name: str, category_type: AccountType | str
    ) -> int:
        """Create a category.

        Args:
            context: Ledger context
            name: Category name
            category_type: Account type the category groups

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty or the type is unknown
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        category_type = coerce_account_type(category_type)
        category_id = self.db.create_category(context.entity_id, name, category_type)
        logger.info("Created %s category '%s'", category_type.value, name)
        return category_id

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def list_categories(
        self, context: LedgerContext, category_type: Optional[AccountType | str] = None
    ) -> list[Category]:
        """List categories of the context entity, optionally of one type."""
        if category_type is not None:
            category_type = coerce_account_type(category_type)
        return self.db.list_categories(context.entity_id, category_type)
