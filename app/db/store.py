from typing import Any, Generic, List, Optional, Type, TypeVar
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StorageError
from app.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class EntityStore(Generic[ModelT]):
    """Generic persistence operations for a single ORM model.

    Wraps a request-scoped session. Read helpers filter by keyword equality
    (``store.find_by(post_id=3)``); write helpers commit immediately and roll
    back on failure, re-raising as :class:`StorageError`.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    def _query(self, criteria: dict):
        query = self.db.query(self.model)
        for key, value in criteria.items():
            if not hasattr(self.model, key):
                raise ValueError(f"{self.model.__name__} has no attribute '{key}'")
            query = query.filter(getattr(self.model, key) == value)
        return query

    def _ordered(self, query, order_by: Optional[str], descending: bool):
        if order_by is None:
            return query.order_by(self.model.id)
        column = getattr(self.model, order_by)
        # id breaks ties between rows written within the same clock tick
        if descending:
            return query.order_by(column.desc(), self.model.id.desc())
        return query.order_by(column.asc(), self.model.id.asc())

    def find_by_id(self, entity_id: Any) -> Optional[ModelT]:
        try:
            return self.db.get(self.model, entity_id)
        except SQLAlchemyError as e:
            logger.error(f"Error loading {self.model.__name__} {entity_id}: {e}")
            raise StorageError(f"Failed to load {self.model.__name__}") from e

    def find_by(
        self,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **criteria: Any
    ) -> List[ModelT]:
        """Return entities matching ``criteria``, newest first when ordering by a timestamp."""
        try:
            query = self._ordered(self._query(criteria), order_by, descending)
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            logger.error(f"Error querying {self.model.__name__} with {criteria}: {e}")
            raise StorageError(f"Failed to query {self.model.__name__}") from e

    def find_first(self, order_by: Optional[str] = None, descending: bool = True, **criteria: Any) -> Optional[ModelT]:
        results = self.find_by(order_by=order_by, descending=descending, limit=1, **criteria)
        return results[0] if results else None

    def count(self, **criteria: Any) -> int:
        try:
            query = self._query(criteria).with_entities(func.count(self.model.id))
            return query.scalar() or 0
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model.__name__} with {criteria}: {e}")
            raise StorageError(f"Failed to count {self.model.__name__}") from e

    def exists(self, entity_id: Any) -> bool:
        return self.count(id=entity_id) > 0

    def save(self, entity: ModelT) -> ModelT:
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save {self.model.__name__}: {e}", exc_info=True)
            raise StorageError(f"Failed to save {self.model.__name__}") from e

    def delete(self, entity: ModelT) -> None:
        try:
            self.db.delete(entity)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {getattr(entity, 'id', None)}: {e}", exc_info=True)
            raise StorageError(f"Failed to delete {self.model.__name__}") from e

    def delete_by_id(self, entity_id: Any) -> bool:
        """Delete the entity if present. Returns False when there was nothing to delete."""
        entity = self.find_by_id(entity_id)
        if entity is None:
            return False
        self.delete(entity)
        return True
