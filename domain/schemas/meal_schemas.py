from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.schemas.summary_schemas import DailySummary


class MealCreate(BaseModel):
    """Schema for recording a new meal"""

    name: str = Field(..., description="Display name of the meal, e.g. '닭가슴살'")
    calories: int = Field(..., ge=0, description="Energy in kcal")
    carbs: int = Field(default=0, ge=0, description="Carbohydrates in grams")
    protein: int = Field(default=0, ge=0, description="Protein in grams")
    fat: int = Field(default=0, ge=0, description="Fat in grams")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v


class MealUpdate(BaseModel):
    """Schema for editing a meal; omitted fields keep their current value"""

    name: Optional[str] = None
    calories: Optional[int] = Field(default=None, ge=0)
    carbs: Optional[int] = Field(default=None, ge=0)
    protein: Optional[int] = Field(default=None, ge=0)
    fat: Optional[int] = Field(default=None, ge=0)
    eaten_at: Optional[datetime] = Field(
        default=None, description="Move the meal to the day containing this time"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v


class MealResponse(BaseModel):
    """Schema for meal response"""

    meal_id: UUID
    name: str
    calories: int
    carbs: int
    protein: int
    fat: int
    eaten_at: datetime
    is_favorite: bool

    model_config = {"from_attributes": True}


class MealIdsRequest(BaseModel):
    """A batch of meal ids (bulk delete, bulk favorite removal)"""

    ids: List[UUID] = Field(..., min_length=1)


class DayViewResponse(BaseModel):
    """A day's meals with the aggregates recomputed after a command"""

    date: datetime
    meals: List[MealResponse]
    summary: DailySummary
    goal: int
    progress: float
    status: str
