"""Reporting entity domain service."""

import logging
from datetime import date
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Entity, LedgerContext
from ledgerkit.domain.errors import (
    MissingContext,
    NotFoundError,
    ValidationError,
    entity_not_found,
)

logger = logging.getLogger(__name__)


class EntityService:
    """Service for managing entities and building ledger contexts."""

    def __init__(self, db: Database):
        """Initialize entity service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entity(
        self, name: str, currency_code: str, currency_name: str, year_start: int = 1
    ) -> int:
        """Create an entity together with its home currency.

        Args:
            name: Entity name
            currency_code: ISO code of the home currency
            currency_name: Name of the home currency
            year_start: Month in which the fiscal year starts

        Returns:
            Entity ID
        """
        name = name.strip()
        if not name:
            raise ValidationError("Entity name cannot be empty")
        if not 1 <= year_start <= 12:
            raise ValidationError(f"Year start month must be between 1 and 12, got {year_start}")

        entity_id = self.db.create_entity(name=name, year_start=year_start)
        currency_id = self.db.create_currency(
            entity_id, currency_code.strip().upper(), currency_name.strip()
        )
        self.db.set_entity_currency(entity_id, currency_id)
        logger.info("Created entity '%s' with home currency %s", name, currency_code)
        return entity_id

    def get_entity(self, entity_id: int) -> Optional[Entity]:
        """Get entity by ID."""
        return self.db.get_entity(entity_id)

    def list_entities(self) -> list[Entity]:
        """List all entities."""
        return self.db.list_entities()

    def resolve_entity(self, entity: Optional[str | int] = None) -> Entity:
        """Resolve an entity by ID or name.

        Without an argument the only existing entity is used.

        Raises:
            MissingContext: If no entity is given and there is not exactly one
            NotFoundError: If the named entity does not exist
        """
        entities = self.db.list_entities()
        if entity is None:
            if len(entities) == 1:
                return entities[0]
            if not entities:
                raise MissingContext("No entity exists. Create one with 'entity create'.")
            raise MissingContext("Several entities exist. Select one with --entity.")

        for candidate in entities:
            if str(candidate.id) == str(entity) or candidate.name == entity:
                return candidate
        raise NotFoundError(f"Entity '{entity}' not found")

    def build_context(
        self,
        entity_id: int,
        today: Optional[date] = None,
        current_year: Optional[int] = None,
    ) -> LedgerContext:
        """Build the ledger context of an entity.

        Raises:
            NotFoundError: If the entity does not exist
        """
        entity = self.db.get_entity(entity_id)
        if entity is None:
            raise NotFoundError(entity_not_found(entity_id))
        return LedgerContext(
            entity_id=entity.id,
            currency_id=entity.currency_id,
            year_start=entity.year_start,
            today=today or date.today(),
            current_year=current_year,
        )
