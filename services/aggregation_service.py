"""
Aggregation Engine - daily and multi-day nutrition totals measured against the goal.
"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Sequence

from app.exceptions import ServiceValidationError
from core.base.base_service import BaseService
from core.utils.dates import ONE_DAY, DayLike, days_ending_at, month_days, start_of_day
from domain.enums import CalorieStatus
from domain.mappers.meal_mapper import MealMapper
from domain.models import MealRecord
from domain.schemas.summary_schemas import (
    DailyProgress,
    DailySummary,
    MacroBreakdown,
    RangeReport,
    RangeTotals,
)
from repositories.goal_repository import GoalStore
from repositories.meal_repository import MealRepository

# Totals within this many kcal of the target count as on target
STATUS_TOLERANCE_KCAL = 200


class AggregationService(BaseService[MealRepository]):
    """Computes summaries, windows, breakdowns and progress from the meal ledger"""

    def __init__(self, meal_repository: MealRepository, goal_store: GoalStore):
        super().__init__(meal_repository, "mealledger.aggregation")
        self.goal_store = goal_store

    def summarize(self, day: DayLike) -> DailySummary:
        """Totals of every meal in the day bucket of ``day``"""
        return MealMapper.to_summary(start_of_day(day), self.repository.query(day))

    def _summaries_for(self, days: Sequence[datetime]) -> List[DailySummary]:
        # One range query, then bucket by day start
        meals = self.repository.query_range(days[0], days[-1] + ONE_DAY)
        buckets: Dict[datetime, List[MealRecord]] = defaultdict(list)
        for meal in meals:
            buckets[start_of_day(meal.eaten_at)].append(meal)
        return [MealMapper.to_summary(day, buckets.get(day, ())) for day in days]

    def rolling_window(self, anchor: DayLike, n: int) -> List[DailySummary]:
        """
        Summaries for the ``n`` calendar days ending at ``anchor`` inclusive.

        Always ordered oldest first, one entry per day, empty days included.

        Raises:
            ServiceValidationError: If ``n`` is less than 1
        """
        if n < 1:
            raise ServiceValidationError(
                "Window length must be at least 1 day", details={"days": n}
            )
        summaries = self._summaries_for(days_ending_at(anchor, n))
        self.log_debug("rolling_window computed", anchor=start_of_day(anchor).date(), days=n)
        return summaries

    def month_summaries(self, anchor: DayLike) -> List[DailySummary]:
        """One summary per day of the calendar month containing ``anchor``"""
        return self._summaries_for(month_days(anchor))

    def macro_breakdown(self, day: DayLike) -> MacroBreakdown:
        summary = self.summarize(day)
        return MacroBreakdown(
            carbs=summary.total_carbs,
            protein=summary.total_protein,
            fat=summary.total_fat,
        )

    @staticmethod
    def range_totals(summaries: Iterable[DailySummary]) -> RangeTotals:
        """Sum an arbitrary sequence of summaries without re-querying"""
        totals = RangeTotals()
        for summary in summaries:
            totals = RangeTotals(
                calories=totals.calories + summary.total_calories,
                carbs=totals.carbs + summary.total_carbs,
                protein=totals.protein + summary.total_protein,
                fat=totals.fat + summary.total_fat,
                days=totals.days + 1,
            )
        return totals

    @staticmethod
    def goal_progress(total_calories: int, goal: int) -> float:
        """total / goal, unclamped; 0 when the goal is not positive"""
        if goal <= 0:
            return 0.0
        return total_calories / goal

    @staticmethod
    def range_progress(summaries: Sequence[DailySummary], goal: int) -> float:
        """Bounded progress over several days: min(total / (goal * days), 1.0)"""
        totals = AggregationService.range_totals(summaries)
        target = goal * totals.days
        if target <= 0:
            return 0.0
        return min(totals.calories / target, 1.0)

    @staticmethod
    def classify(total: int, target: int) -> CalorieStatus:
        if total < target - STATUS_TOLERANCE_KCAL:
            return CalorieStatus.UNDER
        if total > target + STATUS_TOLERANCE_KCAL:
            return CalorieStatus.OVER
        return CalorieStatus.ON_TARGET

    def daily_progress(self, day: DayLike) -> DailyProgress:
        """The day's summary against the current goal"""
        summary = self.summarize(day)
        goal = self.goal_store.get()
        return DailyProgress(
            summary=summary,
            goal=goal,
            progress=self.goal_progress(summary.total_calories, goal),
            status=self.classify(summary.total_calories, goal),
        )

    def range_report(self, anchor: DayLike, n: int) -> RangeReport:
        summaries = self.rolling_window(anchor, n)
        goal = self.goal_store.get()
        return RangeReport(
            summaries=summaries,
            totals=self.range_totals(summaries),
            goal=goal,
            progress=self.range_progress(summaries, goal),
        )
