"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.meal_mapper import MealMapper, NUTRIENT_FIELDS, EDITABLE_FIELDS

__all__ = ["MealMapper", "NUTRIENT_FIELDS", "EDITABLE_FIELDS"]
