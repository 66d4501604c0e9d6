"""
Favorites & History Manager - reusable meal templates and duplication into a day.
"""

from typing import Iterable, List
from uuid import UUID

from core.base.base_service import BaseService
from core.utils.dates import DayLike, today
from domain.mappers.meal_mapper import MealMapper
from domain.models import MealRecord
from repositories.meal_repository import MealRepository


class FavoritesService(BaseService[MealRepository]):
    def __init__(self, meal_repository: MealRepository):
        super().__init__(meal_repository, "mealledger.favorites")

    def favorites(self) -> List[MealRecord]:
        return self.repository.query_favorites()

    def promote(self, meal_id: UUID) -> MealRecord:
        (meal,) = self.repository.set_favorite([meal_id], True)
        self.log_info("promote", meal_id=meal_id)
        return meal

    def demote(self, meal_id: UUID) -> MealRecord:
        """Unset the favorite flag; demoting a non-favorite changes nothing"""
        (meal,) = self.repository.set_favorite([meal_id], False)
        self.log_info("demote", meal_id=meal_id)
        return meal

    def toggle(self, meal_id: UUID) -> MealRecord:
        return self.repository.toggle_favorite(meal_id)

    def add_from_favorite(self, favorite_id: UUID, target_day: DayLike) -> MealRecord:
        """
        Record a new meal on ``target_day`` with the name and nutrients of
        ``favorite_id``.

        The new meal has its own id and is not a favorite. The source meal is
        only read, never written.
        """
        source = self.repository.require(favorite_id)
        meal = self.repository.add(MealMapper.copy_fields(source), target_day)
        self.log_info(
            "add_from_favorite",
            source_id=favorite_id,
            meal_id=meal.meal_id,
            day=meal.eaten_at.date(),
        )
        return meal

    def copy_to_today(self, source_id: UUID) -> MealRecord:
        """Duplicate a meal into today, evaluated at call time"""
        return self.add_from_favorite(source_id, today())

    def bulk_remove_favorite(self, meal_ids: Iterable[UUID]) -> List[MealRecord]:
        """Demote a batch in one transaction; a failure leaves every flag unchanged"""
        meals = self.repository.set_favorite(meal_ids, False)
        self.log_info("bulk_remove_favorite", count=len(meals))
        return meals
