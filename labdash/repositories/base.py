"""Base repository: shared lookups and the store's failure policy.

Subclasses set ``model_class`` and ``not_found_error``. Reads go through
``_fetch_all``; writes go through ``add`` / ``save`` / ``delete``. A
database failure in any of them is logged, rolled back and turned into an
empty list, ``None`` or ``False``. It is never raised to the caller.
Missing rows are different: ``get_by_id`` raises the typed not-found
error so the API can answer 404.
"""

import logging
from typing import TypeVar, Generic, List, Optional, Type

import sqlalchemy.exc
from sqlalchemy.orm import Session, Query

from ..database import Base
from ..exceptions import LabException

ModelT = TypeVar("ModelT", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model (e.g., Project)
        id_column:       Name of the primary-key column (default "id")
        not_found_error: Exception class to raise from get_by_id
    """

    model_class: Type[ModelT]
    id_column: str = "id"
    not_found_error: Type[LabException]

    def __init__(self, db: Session):
        self.db = db

    @property
    def table(self) -> str:
        return self.model_class.__tablename__

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def get_by_id(self, entity_id: str) -> ModelT:
        """Get entity by primary key. Raises not_found_error if missing."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise self.not_found_error(entity_id)
        return entity

    def get_by_id_optional(self, entity_id: str) -> Optional[ModelT]:
        col = getattr(self.model_class, self.id_column)
        return self._base_query().filter(col == entity_id).first()

    # --- failure-tolerant primitives ---

    def _fetch_all(self, query: Query) -> List[ModelT]:
        try:
            return query.all()
        except sqlalchemy.exc.SQLAlchemyError as e:
            logger.error("Fetch from %s failed: %s", self.table, e, extra={"table": self.table})
            self.db.rollback()
            return []

    def add(self, entity: ModelT) -> Optional[ModelT]:
        """Insert and commit. Returns the refreshed row, or None on failure."""
        self.db.add(entity)
        return self.save(entity)

    def save(self, entity: ModelT) -> Optional[ModelT]:
        """Commit pending changes to ``entity``. Returns it refreshed, or None on failure."""
        try:
            self.db.commit()
        except sqlalchemy.exc.SQLAlchemyError as e:
            logger.error("Write to %s failed: %s", self.table, e, extra={"table": self.table})
            self.db.rollback()
            return None
        self.db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> bool:
        """Delete and commit. Returns False on failure."""
        try:
            self.db.delete(entity)
            self.db.commit()
        except sqlalchemy.exc.SQLAlchemyError as e:
            logger.error("Delete from %s failed: %s", self.table, e, extra={"table": self.table})
            self.db.rollback()
            return False
        return True
