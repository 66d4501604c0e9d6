"""
Adapters package - External collaborators.
SQL entity store and the nutrition lookup service.
"""

from adapters.entity_store import EntityStore, Predicate, SortKey
from adapters.nutrition_adapter import (
    NutritionLookupAdapter,
    LookupState,
    parse_nutrition_reply,
)

__all__ = [
    "EntityStore",
    "Predicate",
    "SortKey",
    "NutritionLookupAdapter",
    "LookupState",
    "parse_nutrition_reply",
]
