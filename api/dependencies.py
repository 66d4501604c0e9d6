"""
API dependencies for dependency injection
"""

from datetime import date, datetime
from typing import AsyncGenerator, Generator, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from adapters.nutrition_adapter import NutritionLookupAdapter
from core.utils.dates import start_of_day, today
from domain.models import get_db_session
from repositories import GoalStore, MealRepository
from services import AggregationService, FavoritesService, MealService


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_meal_repository(db: Session = Depends(get_db)) -> MealRepository:
    return MealRepository(db)


def get_goal_store(db: Session = Depends(get_db)) -> GoalStore:
    return GoalStore(db)


def get_aggregation_service(
    meals: MealRepository = Depends(get_meal_repository),
    goal_store: GoalStore = Depends(get_goal_store),
) -> AggregationService:
    return AggregationService(meals, goal_store)


def get_meal_service(
    meals: MealRepository = Depends(get_meal_repository),
    aggregation: AggregationService = Depends(get_aggregation_service),
) -> MealService:
    return MealService(meals, aggregation)


def get_favorites_service(
    meals: MealRepository = Depends(get_meal_repository),
) -> FavoritesService:
    return FavoritesService(meals)


async def get_nutrition_adapter() -> AsyncGenerator[NutritionLookupAdapter, None]:
    async with NutritionLookupAdapter() as adapter:
        yield adapter


def resolve_day(day: Optional[date]) -> datetime:
    """Start of the requested day, or of today when no day is given"""
    return start_of_day(day) if day is not None else today()
