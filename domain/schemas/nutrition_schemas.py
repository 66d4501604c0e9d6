from pydantic import BaseModel, Field


class NutritionLookupRequest(BaseModel):
    """Free-text food name to estimate"""

    food_name: str = Field(..., min_length=1, description="e.g. '김치찌개'")


class NutritionEstimate(BaseModel):
    """Estimated macros for one serving, used to pre-fill an add command"""

    calories: int = Field(..., ge=0)
    carbs: int = Field(..., ge=0)
    protein: int = Field(..., ge=0)
    fat: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def is_unknown(self) -> bool:
        """The service answers 0, 0, 0, 0 when it does not recognise the food"""
        return self.calories == self.carbs == self.protein == self.fat == 0
