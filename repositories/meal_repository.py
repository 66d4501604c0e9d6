"""
Meal Repository - Data access layer for the meal ledger
"""

import logging
import unicodedata
import uuid
from typing import Iterable, List, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from adapters.entity_store import Predicate, SortKey
from app.exceptions import StoreError
from core.utils.dates import DayLike, day_bounds, start_of_day
from domain.mappers.meal_mapper import MealAttrs, MealMapper
from domain.models import MealRecord
from repositories.base import BaseRepository

logger = logging.getLogger("mealledger.repository.meal")


def _search_key(text: str) -> str:
    """Compatibility-decomposed, accent-stripped, casefolded form of ``text``"""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


class MealRepository(BaseRepository[MealRecord]):
    """Repository for meal records, bucketed by calendar day"""

    def __init__(self, db: Session):
        super().__init__(db, MealRecord, "meal_id")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, attrs: MealAttrs, day: DayLike) -> MealRecord:
        """
        Record a new meal on ``day``.

        The meal gets a fresh id, ``eaten_at`` set to the start of ``day`` and
        is not a favorite.

        Raises:
            ServiceValidationError: If the attributes are invalid (nothing is written)
            PersistenceError: If the store write fails (rolled back)
        """
        fields = MealMapper.to_fields(attrs)
        meal = MealRecord(
            meal_id=uuid.uuid4(),
            eaten_at=start_of_day(day),
            is_favorite=False,
            **fields,
        )
        with self.transaction("add meal"):
            self.store.insert(meal)
        logger.info(
            "meal_added meal_id=%s name=%s calories=%s day=%s",
            meal.meal_id, meal.name, meal.calories, meal.eaten_at.date(),
        )
        return meal

    def update(self, meal_id: UUID, attrs: MealAttrs) -> MealRecord:
        """Edit the supplied fields of a meal in place"""
        fields = MealMapper.to_fields(attrs, partial=True)
        if not fields:
            return self.require(meal_id)
        with self.transaction("update meal"):
            meal = self.store.update(meal_id, fields)
        logger.info("meal_updated meal_id=%s fields=%s", meal_id, sorted(fields))
        return meal

    def delete(self, meal_id: UUID) -> None:
        with self.transaction("delete meal"):
            self.store.delete(meal_id)
        logger.info("meal_deleted meal_id=%s", meal_id)

    def delete_many(self, meal_ids: Iterable[UUID]) -> int:
        """Delete several meals in one transaction; all or nothing"""
        unique_ids = list(dict.fromkeys(meal_ids))
        with self.transaction("delete meals"):
            for meal_id in unique_ids:
                self.store.delete(meal_id)
        logger.info("meals_deleted count=%d", len(unique_ids))
        return len(unique_ids)

    def toggle_favorite(self, meal_id: UUID) -> MealRecord:
        with self.transaction("toggle favorite"):
            meal = self.require(meal_id)
            self.store.update(meal_id, {"is_favorite": not meal.is_favorite})
        logger.info("favorite_toggled meal_id=%s is_favorite=%s", meal_id, meal.is_favorite)
        return meal

    def set_favorite(self, meal_ids: Iterable[UUID], value: bool) -> List[MealRecord]:
        """
        Set ``is_favorite`` on a batch of meals in one transaction.

        Every id is resolved before anything is written, so an unknown id
        fails the whole batch. Meals already in the requested state are left
        untouched.
        """
        unique_ids = list(dict.fromkeys(meal_ids))
        with self.transaction("set favorite"):
            meals = [self.require(meal_id) for meal_id in unique_ids]
            for meal in meals:
                if meal.is_favorite != value:
                    self.store.update(meal.meal_id, {"is_favorite": value})
        return meals

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _query(self, predicates: Sequence[Predicate], sort: Sequence[SortKey]) -> List[MealRecord]:
        try:
            return self.store.query(predicates, sort)
        except StoreError:
            self.db.rollback()
            raise

    def query(self, day: DayLike) -> List[MealRecord]:
        """Meals in the half-open day bucket of ``day``, in the order they were recorded"""
        start, end = day_bounds(day)
        return self._query(
            [Predicate.gte("eaten_at", start), Predicate.lt("eaten_at", end)],
            [SortKey("eaten_at"), SortKey("created_at")],
        )

    def query_range(self, first_day: DayLike, end_day: DayLike) -> List[MealRecord]:
        """Meals from the start of ``first_day`` up to, not including, the start of ``end_day``"""
        return self._query(
            [
                Predicate.gte("eaten_at", start_of_day(first_day)),
                Predicate.lt("eaten_at", start_of_day(end_day)),
            ],
            [SortKey("eaten_at"), SortKey("created_at")],
        )

    def query_favorites(self) -> List[MealRecord]:
        """Favorite meals by name, most recent first within a name"""
        return self._query(
            [Predicate.eq("is_favorite", True)],
            [
                SortKey("name"),
                SortKey("eaten_at", descending=True),
                SortKey("created_at", descending=True),
            ],
        )

    def query_all(self) -> List[MealRecord]:
        return self._query(
            [],
            [SortKey("eaten_at", descending=True), SortKey("created_at", descending=True)],
        )

    @staticmethod
    def search_by_name(keyword: str, within: Iterable[MealRecord]) -> List[MealRecord]:
        """
        Case- and accent-insensitive substring filter on meal names.

        Canonically equivalent spellings match, so decomposed Hangul finds
        its composed form and "cafe" finds "Café".

        Keeps the candidates' order. A blank keyword returns every candidate.
        """
        needle = _search_key((keyword or "").strip())
        candidates = list(within)
        if not needle:
            return candidates
        return [meal for meal in candidates if needle in _search_key(meal.name or "")]
