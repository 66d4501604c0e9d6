"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.meal_repository import MealRepository
from repositories.goal_repository import GoalStore

__all__ = [
    "BaseRepository",
    "MealRepository",
    "GoalStore",
]
