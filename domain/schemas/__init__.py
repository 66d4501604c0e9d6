"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealIdsRequest,
    DayViewResponse,
)
from domain.schemas.summary_schemas import (
    DailySummary,
    MacroBreakdown,
    MacroBreakdownResponse,
    RangeTotals,
    DailyProgress,
    RangeReport,
    GoalResponse,
    GoalUpdate,
)
from domain.schemas.nutrition_schemas import (
    NutritionLookupRequest,
    NutritionEstimate,
)

__all__ = [
    # Meal schemas
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealIdsRequest",
    "DayViewResponse",
    # Summary schemas
    "DailySummary",
    "MacroBreakdown",
    "MacroBreakdownResponse",
    "RangeTotals",
    "DailyProgress",
    "RangeReport",
    "GoalResponse",
    "GoalUpdate",
    # Nutrition schemas
    "NutritionLookupRequest",
    "NutritionEstimate",
]
