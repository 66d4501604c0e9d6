"""
Domain enums for the meal ledger.
Contains all enumeration types used across the domain models.
"""

import enum


class GoalType(str, enum.Enum):
    """Dietary goal presets"""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN = "maintain"
    BULK_UP = "bulk_up"

    @property
    def target_calories(self) -> int:
        return GOAL_TARGET_CALORIES[self]


GOAL_TARGET_CALORIES = {
    GoalType.LOSE_WEIGHT: 1800,
    GoalType.MAINTAIN: 2200,
    GoalType.BULK_UP: 2600,
}


class CalorieStatus(str, enum.Enum):
    """Where a calorie total sits relative to its target"""

    UNDER = "under"
    ON_TARGET = "on-target"
    OVER = "over"


class PredicateOperator(str, enum.Enum):
    """Operators understood by the entity store's typed predicates"""

    EQ = "eq"
    GTE = "gte"
    LT = "lt"
    IN = "in"
    CONTAINS = "contains"
