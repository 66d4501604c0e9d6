"""
Meal domain mappers.
Handles validation of incoming meal attributes and transformation between
ORM records and DTOs.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, Mapping, Union

from pydantic import BaseModel

from app.exceptions import ServiceValidationError
from core.utils.dates import start_of_day
from domain.models import MealRecord
from domain.schemas.meal_schemas import MealResponse
from domain.schemas.summary_schemas import DailySummary

NUTRIENT_FIELDS = ("calories", "carbs", "protein", "fat")
EDITABLE_FIELDS = ("name",) + NUTRIENT_FIELDS

MealAttrs = Union[Mapping[str, Any], BaseModel]


class MealMapper:
    """Mapper for meal-related transformations."""

    @staticmethod
    def to_fields(attrs: MealAttrs, partial: bool = False) -> Dict[str, Any]:
        """
        Validate meal attributes and return the column values to write.

        Rejects empty names and negative or non-integer nutrients before
        anything reaches the store.

        Args:
            attrs: mapping or pydantic schema with name and nutrient fields
            partial: when True only the supplied fields are validated and
                returned (edit commands); ``eaten_at`` may also be supplied
                and is normalized to the start of its day

        Returns:
            Dict of validated column values

        Raises:
            ServiceValidationError: If any field is missing or invalid
        """
        if isinstance(attrs, BaseModel):
            data = attrs.model_dump(exclude_none=partial)
        else:
            data = dict(attrs)

        allowed = EDITABLE_FIELDS + ("eaten_at",) if partial else EDITABLE_FIELDS
        unknown = sorted(set(data) - set(allowed))
        if unknown:
            raise ServiceValidationError(
                f"Unknown meal fields: {', '.join(unknown)}",
                details={"fields": unknown},
            )

        fields: Dict[str, Any] = {}
        errors: Dict[str, str] = {}

        if "name" in data or not partial:
            name = data.get("name")
            if not isinstance(name, str) or not name.strip():
                errors["name"] = "must be a non-empty string"
            else:
                fields["name"] = name.strip()

        for field in NUTRIENT_FIELDS:
            if field not in data:
                if not partial:
                    fields[field] = 0
                continue
            value = data[field]
            if isinstance(value, bool) or not isinstance(value, int):
                errors[field] = "must be an integer"
            elif value < 0:
                errors[field] = "must not be negative"
            else:
                fields[field] = value

        if partial and data.get("eaten_at") is not None:
            eaten_at = data["eaten_at"]
            if not isinstance(eaten_at, (date, datetime)):
                errors["eaten_at"] = "must be a date or datetime"
            else:
                fields["eaten_at"] = start_of_day(eaten_at)

        if errors:
            raise ServiceValidationError("Invalid meal data", details=errors)
        return fields

    @staticmethod
    def copy_fields(source: MealRecord) -> Dict[str, Any]:
        """Name and nutrients of an existing meal, for duplication"""
        return {field: getattr(source, field) for field in EDITABLE_FIELDS}

    @staticmethod
    def to_response(meal: MealRecord) -> MealResponse:
        return MealResponse.model_validate(meal)

    @staticmethod
    def to_summary(day: datetime, meals: Iterable[MealRecord]) -> DailySummary:
        """Sum the four nutrient fields of ``meals`` into a DailySummary for ``day``"""
        totals = dict.fromkeys(NUTRIENT_FIELDS, 0)
        for meal in meals:
            for field in NUTRIENT_FIELDS:
                totals[field] += getattr(meal, field)
        return DailySummary(
            date=day,
            total_calories=totals["calories"],
            total_carbs=totals["carbs"],
            total_protein=totals["protein"],
            total_fat=totals["fat"],
        )
