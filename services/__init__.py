"""Services package - Business logic layer"""

from services.aggregation_service import AggregationService, STATUS_TOLERANCE_KCAL
from services.meal_service import MealService
from services.favorites_service import FavoritesService

__all__ = [
    "AggregationService",
    "STATUS_TOLERANCE_KCAL",
    "MealService",
    "FavoritesService",
]
