from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from domain.enums import CalorieStatus, GoalType


class DailySummary(BaseModel):
    """Totals over every meal in the day bucket starting at ``date``"""

    date: datetime
    total_calories: int = 0
    total_carbs: int = 0
    total_protein: int = 0
    total_fat: int = 0

    model_config = {"frozen": True}


class MacroBreakdown(BaseModel):
    """Macro grams for a day, with each macro's share of the gram total"""

    carbs: int = 0
    protein: int = 0
    fat: int = 0

    @property
    def total_grams(self) -> int:
        return self.carbs + self.protein + self.fat

    def proportions(self) -> dict:
        """Share of each macro; all zero when nothing was eaten"""
        total = self.total_grams
        if total == 0:
            return {"carbs": 0.0, "protein": 0.0, "fat": 0.0}
        return {
            "carbs": self.carbs / total,
            "protein": self.protein / total,
            "fat": self.fat / total,
        }


class RangeTotals(BaseModel):
    """Sums across an arbitrary sequence of daily summaries"""

    calories: int = 0
    carbs: int = 0
    protein: int = 0
    fat: int = 0
    days: int = 0


class DailyProgress(BaseModel):
    """A day's summary measured against the current calorie goal"""

    summary: DailySummary
    goal: int
    progress: float = Field(..., description="total / goal, not clamped")
    status: CalorieStatus


class RangeReport(BaseModel):
    """Rolling window of summaries with totals and bounded progress"""

    summaries: List[DailySummary]
    totals: RangeTotals
    goal: int
    progress: float = Field(..., ge=0, le=1, description="min(total / target, 1.0)")


class MacroBreakdownResponse(BaseModel):
    """Macro breakdown plus proportions for display"""

    date: datetime
    carbs: int
    protein: int
    fat: int
    proportions: dict


class GoalResponse(BaseModel):
    """Current daily calorie goal"""

    daily_calorie_goal: int
    preset: Optional[GoalType] = None


class GoalUpdate(BaseModel):
    """Proposed daily calorie goal; values <= 0 are ignored"""

    daily_calorie_goal: int
