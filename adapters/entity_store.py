"""
SQLAlchemy-backed entity store.

Exposes the four store primitives the ledger relies on (insert, update,
delete, query by typed predicate and sort) plus a lookup by id. Every call
flushes so failures surface synchronously as StoreError; committing and
rolling back belong to the repository's transaction scope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, StoreError
from domain.enums import PredicateOperator

logger = logging.getLogger("mealledger.store")

ModelType = TypeVar("ModelType")


@dataclass(frozen=True)
class Predicate:
    """A single ``field <operator> value`` condition"""

    field: str
    operator: PredicateOperator
    value: Any

    @classmethod
    def eq(cls, field: str, value: Any) -> "Predicate":
        return cls(field, PredicateOperator.EQ, value)

    @classmethod
    def gte(cls, field: str, value: Any) -> "Predicate":
        return cls(field, PredicateOperator.GTE, value)

    @classmethod
    def lt(cls, field: str, value: Any) -> "Predicate":
        return cls(field, PredicateOperator.LT, value)

    @classmethod
    def isin(cls, field: str, values: Sequence[Any]) -> "Predicate":
        return cls(field, PredicateOperator.IN, tuple(values))

    @classmethod
    def contains(cls, field: str, value: str) -> "Predicate":
        return cls(field, PredicateOperator.CONTAINS, value)


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


class EntityStore(Generic[ModelType]):
    """Record storage for one ORM model over a SQLAlchemy session"""

    def __init__(self, db: Session, model: Type[ModelType], id_field: str):
        self.db = db
        self.model = model
        self.id_field = id_field

    def _column(self, field: str):
        column = getattr(self.model, field, None)
        if column is None:
            raise StoreError(
                f"{self.model.__name__} has no field '{field}'",
                details={"field": field},
            )
        return column

    def _condition(self, predicate: Predicate):
        column = self._column(predicate.field)
        op = predicate.operator
        if op == PredicateOperator.EQ:
            return column == predicate.value
        if op == PredicateOperator.GTE:
            return column >= predicate.value
        if op == PredicateOperator.LT:
            return column < predicate.value
        if op == PredicateOperator.IN:
            return column.in_(predicate.value)
        if op == PredicateOperator.CONTAINS:
            return column.icontains(predicate.value, autoescape=True)
        raise StoreError(f"Unsupported operator: {op}")

    def get(self, entity_id: Any) -> Optional[ModelType]:
        try:
            return self.db.get(self.model, entity_id)
        except SQLAlchemyError as exc:
            logger.error("get %s %s failed: %s", self.model.__name__, entity_id, exc)
            raise StoreError(f"Could not read {self.model.__name__} {entity_id}") from exc

    def insert(self, record: ModelType) -> Any:
        """Add a record and return its id"""
        try:
            self.db.add(record)
            self.db.flush()
        except SQLAlchemyError as exc:
            logger.error("insert %s failed: %s", self.model.__name__, exc)
            raise StoreError(f"Could not insert {self.model.__name__}") from exc
        return getattr(record, self.id_field)

    def update(self, entity_id: Any, patch: Mapping[str, Any]) -> ModelType:
        """Apply ``patch`` to the record in place"""
        record = self.get(entity_id)
        if record is None:
            raise NotFoundError(f"{self.model.__name__} {entity_id} not found")
        for field, value in patch.items():
            self._column(field)
            setattr(record, field, value)
        try:
            self.db.flush()
        except SQLAlchemyError as exc:
            logger.error("update %s %s failed: %s", self.model.__name__, entity_id, exc)
            raise StoreError(f"Could not update {self.model.__name__} {entity_id}") from exc
        return record

    def delete(self, entity_id: Any) -> None:
        record = self.get(entity_id)
        if record is None:
            raise NotFoundError(f"{self.model.__name__} {entity_id} not found")
        try:
            self.db.delete(record)
            self.db.flush()
        except SQLAlchemyError as exc:
            logger.error("delete %s %s failed: %s", self.model.__name__, entity_id, exc)
            raise StoreError(f"Could not delete {self.model.__name__} {entity_id}") from exc

    def query(
        self,
        predicates: Sequence[Predicate] = (),
        sort: Sequence[SortKey] = (),
    ) -> List[ModelType]:
        """Records matching every predicate, ordered by the sort keys"""
        stmt = select(self.model)
        for predicate in predicates:
            stmt = stmt.where(self._condition(predicate))
        for key in sort:
            column = self._column(key.field)
            stmt = stmt.order_by(column.desc() if key.descending else column.asc())
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as exc:
            logger.error("query %s failed: %s", self.model.__name__, exc)
            raise StoreError(f"Could not query {self.model.__name__}") from exc
