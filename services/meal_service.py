"""
Meal Service - validated ledger commands that answer with the recomputed day view.
"""

from typing import Iterable, List
from uuid import UUID

from core.base.base_service import BaseService
from core.utils.dates import DayLike, start_of_day
from domain.mappers.meal_mapper import MealAttrs, MealMapper
from domain.models import MealRecord
from domain.schemas.meal_schemas import DayViewResponse
from repositories.meal_repository import MealRepository
from services.aggregation_service import AggregationService


class MealService(BaseService[MealRepository]):
    def __init__(self, meal_repository: MealRepository, aggregation: AggregationService):
        super().__init__(meal_repository, "mealledger.meals")
        self.aggregation = aggregation

    @staticmethod
    def validate_meal_data(attrs: MealAttrs, partial: bool = False) -> dict:
        """
        Validate meal attributes before any store call.

        Raises:
            ServiceValidationError: On an empty name or negative nutrients
        """
        return MealMapper.to_fields(attrs, partial=partial)

    def day_view(self, day: DayLike) -> DayViewResponse:
        """Meals of a day with the day's summary measured against the goal"""
        meals = self.repository.query(day)
        progress = self.aggregation.daily_progress(day)
        return DayViewResponse(
            date=start_of_day(day),
            meals=[MealMapper.to_response(meal) for meal in meals],
            summary=progress.summary,
            goal=progress.goal,
            progress=progress.progress,
            status=progress.status.value,
        )

    def add_meal(self, attrs: MealAttrs, day: DayLike) -> DayViewResponse:
        self.validate_meal_data(attrs)
        meal = self.repository.add(attrs, day)
        self.log_info("add_meal", meal_id=meal.meal_id, day=meal.eaten_at.date())
        return self.day_view(meal.eaten_at)

    def update_meal(self, meal_id: UUID, attrs: MealAttrs) -> DayViewResponse:
        """Edit a meal; the returned view is for the day the meal ends up on"""
        self.validate_meal_data(attrs, partial=True)
        meal = self.repository.update(meal_id, attrs)
        return self.day_view(meal.eaten_at)

    def delete_meal(self, meal_id: UUID) -> DayViewResponse:
        day = self.repository.require(meal_id).eaten_at
        self.repository.delete(meal_id)
        return self.day_view(day)

    def delete_meals(self, meal_ids: Iterable[UUID]) -> int:
        return self.repository.delete_many(meal_ids)

    def get_meal(self, meal_id: UUID) -> MealRecord:
        return self.repository.require(meal_id)

    def all_meals(self) -> List[MealRecord]:
        return self.repository.query_all()

    def search(self, keyword: str) -> List[MealRecord]:
        """Every meal whose name contains ``keyword``, most recent first"""
        return self.repository.search_by_name(keyword, self.repository.query_all())
