"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

import logging
from abc import ABC
from contextlib import contextmanager
from typing import Generic, Iterator, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from adapters.entity_store import EntityStore
from app.exceptions import NotFoundError, PersistenceError, StoreError

ModelType = TypeVar("ModelType")

logger = logging.getLogger("mealledger.repository")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing entity lookup and a single-writer transaction scope.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType], id_field: str):
        self.db = db
        self.model = model
        self.store: EntityStore[ModelType] = EntityStore(db, model, id_field)

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """Get entity by ID, or None if it does not exist"""
        return self.store.get(entity_id)

    def require(self, entity_id: UUID) -> ModelType:
        """Get entity by ID or raise NotFoundError"""
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(
                f"{self.model.__name__} {entity_id} not found",
                details={"id": str(entity_id)},
            )
        return entity

    def exists(self, entity_id: UUID) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None

    @contextmanager
    def transaction(self, action: str) -> Iterator[None]:
        """
        Run the enclosed store calls as one unit and commit them together.

        Any failure rolls the session back so the previously committed state
        stays observable. Store failures are re-raised as PersistenceError;
        anything else (validation, missing records) is re-raised unchanged.

        Args:
            action: short description used in logs and error messages
        """
        try:
            yield
            self.db.commit()
        except (StoreError, SQLAlchemyError) as exc:
            self.db.rollback()
            logger.exception("Rolled back %s", action)
            raise PersistenceError(f"Could not {action}", details={"action": action}) from exc
        except Exception:
            self.db.rollback()
            raise
