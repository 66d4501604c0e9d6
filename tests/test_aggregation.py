"""
Tests for the aggregation engine.

Covers daily summaries, rolling windows, month summaries, macro breakdowns,
range totals, goal progress (unclamped per day, bounded over a range) and
the calorie status classification.
"""

from datetime import date, datetime, timedelta

import pytest

from app.exceptions import ServiceValidationError
from domain.enums import CalorieStatus
from domain.schemas.summary_schemas import DailySummary, MacroBreakdown
from repositories import GoalStore, MealRepository
from services import STATUS_TOLERANCE_KCAL, AggregationService
from test_fixtures import BIBIMBAP, CHICKEN_BREAST, DAY, KIMCHI_STEW, NEXT_DAY, PREVIOUS_DAY


def _summary(day: datetime, calories: int = 0, carbs: int = 0, protein: int = 0, fat: int = 0):
    return DailySummary(
        date=day,
        total_calories=calories,
        total_carbs=carbs,
        total_protein=protein,
        total_fat=fat,
    )


# =============================================================================
# DAILY SUMMARY
# =============================================================================


def test_summarize_accumulates_meals_of_the_day(
    meal_repository: MealRepository, aggregation: AggregationService
):
    """
    Test summarize() after adding meals one by one.

    Verifies:
    - One meal: totals equal that meal
    - Second meal on the same day: totals are the sum
    """
    meal_repository.add(CHICKEN_BREAST, DAY)
    summary = aggregation.summarize(DAY)
    assert (
        summary.total_calories, summary.total_carbs, summary.total_protein, summary.total_fat
    ) == (200, 0, 40, 5)

    meal_repository.add({"name": "현미밥", "calories": 300, "carbs": 30, "protein": 10, "fat": 10}, DAY)
    summary = aggregation.summarize(DAY)
    assert (
        summary.total_calories, summary.total_carbs, summary.total_protein, summary.total_fat
    ) == (500, 30, 50, 15)
    assert summary.date == DAY


def test_summarize_empty_day_is_all_zero(aggregation: AggregationService):
    summary = aggregation.summarize(DAY)

    assert summary == _summary(DAY)


def test_summarize_ignores_other_days(
    meal_repository: MealRepository, aggregation: AggregationService
):
    meal_repository.add(CHICKEN_BREAST, PREVIOUS_DAY)
    meal_repository.add(BIBIMBAP, DAY)
    meal_repository.add(KIMCHI_STEW, NEXT_DAY)

    assert aggregation.summarize(DAY).total_calories == 300


# =============================================================================
# ROLLING WINDOW / MONTH
# =============================================================================


@pytest.mark.parametrize("n", [1, 2, 7, 30])
def test_rolling_window_shape(aggregation: AggregationService, n: int):
    """
    Test rolling_window() for several lengths.

    Verifies:
    - Exactly n entries
    - Dates strictly increasing by one calendar day
    - Last entry is the start of the anchor day
    """
    window = aggregation.rolling_window(DAY + timedelta(hours=18), n)

    assert len(window) == n
    assert window[-1].date == DAY
    for earlier, later in zip(window, window[1:]):
        assert later.date - earlier.date == timedelta(days=1)


def test_rolling_window_includes_empty_days(
    meal_repository: MealRepository, aggregation: AggregationService
):
    meal_repository.add(CHICKEN_BREAST, PREVIOUS_DAY - timedelta(days=1))
    meal_repository.add(BIBIMBAP, DAY)
    meal_repository.add(KIMCHI_STEW, NEXT_DAY)

    window = aggregation.rolling_window(DAY, 3)

    assert [s.total_calories for s in window] == [200, 0, 300]


def test_rolling_window_crosses_month_boundary(aggregation: AggregationService):
    window = aggregation.rolling_window(date(2024, 3, 2), 3)

    assert [s.date for s in window] == [
        datetime(2024, 2, 29), datetime(2024, 3, 1), datetime(2024, 3, 2),
    ]


@pytest.mark.parametrize("n", [0, -3])
def test_rolling_window_rejects_non_positive_length(aggregation: AggregationService, n: int):
    with pytest.raises(ServiceValidationError):
        aggregation.rolling_window(DAY, n)


def test_month_summaries_cover_every_day(
    meal_repository: MealRepository, aggregation: AggregationService
):
    meal_repository.add(CHICKEN_BREAST, datetime(2024, 2, 29))
    meal_repository.add(BIBIMBAP, datetime(2024, 3, 1))

    month = aggregation.month_summaries(datetime(2024, 2, 10))

    assert len(month) == 29
    assert month[0].date == datetime(2024, 2, 1)
    assert month[-1].date == datetime(2024, 2, 29)
    assert month[-1].total_calories == 200
    assert sum(s.total_calories for s in month) == 200


# =============================================================================
# MACROS / TOTALS
# =============================================================================


def test_macro_breakdown_and_proportions(
    meal_repository: MealRepository, aggregation: AggregationService
):
    meal_repository.add(CHICKEN_BREAST, DAY)
    meal_repository.add(BIBIMBAP, DAY)

    breakdown = aggregation.macro_breakdown(DAY)

    assert (breakdown.carbs, breakdown.protein, breakdown.fat) == (30, 50, 15)
    assert breakdown.total_grams == 95
    proportions = breakdown.proportions()
    assert proportions["protein"] == pytest.approx(50 / 95)
    assert sum(proportions.values()) == pytest.approx(1.0)


def test_macro_proportions_of_empty_day_are_zero():
    assert MacroBreakdown().proportions() == {"carbs": 0.0, "protein": 0.0, "fat": 0.0}


def test_range_totals_sums_any_sequence():
    summaries = [
        _summary(PREVIOUS_DAY, 200, 0, 40, 5),
        _summary(DAY),
        _summary(NEXT_DAY, 300, 30, 10, 10),
    ]

    totals = AggregationService.range_totals(summaries)

    assert (totals.calories, totals.carbs, totals.protein, totals.fat) == (500, 30, 50, 15)
    assert totals.days == 3


def test_range_totals_of_nothing():
    totals = AggregationService.range_totals([])

    assert totals.calories == 0
    assert totals.days == 0


# =============================================================================
# PROGRESS / STATUS
# =============================================================================


@pytest.mark.parametrize("total", [0, 500, 5000, -10])
@pytest.mark.parametrize("goal", [0, -1800])
def test_goal_progress_zero_for_non_positive_goal(total: int, goal: int):
    assert AggregationService.goal_progress(total, goal) == 0


def test_goal_progress_is_not_clamped():
    assert AggregationService.goal_progress(900, 1800) == pytest.approx(0.5)
    assert AggregationService.goal_progress(2700, 1800) == pytest.approx(1.5)


def test_range_progress_is_bounded():
    """
    Test range_progress() over a multi-day window.

    Verifies:
    - Ratio is total / (goal * days)
    - Ratio never exceeds 1.0
    - Zero when the goal is not positive
    """
    under = [_summary(DAY, 900), _summary(NEXT_DAY, 900)]
    over = [_summary(DAY, 5000), _summary(NEXT_DAY, 5000)]

    assert AggregationService.range_progress(under, 1800) == pytest.approx(0.5)
    assert AggregationService.range_progress(over, 1800) == 1.0
    assert AggregationService.range_progress(over, 0) == 0.0
    assert AggregationService.range_progress([], 1800) == 0.0


@pytest.mark.parametrize(
    "total, expected",
    [
        (0, CalorieStatus.UNDER),
        (1800 - STATUS_TOLERANCE_KCAL - 1, CalorieStatus.UNDER),
        (1800 - STATUS_TOLERANCE_KCAL, CalorieStatus.ON_TARGET),
        (1800, CalorieStatus.ON_TARGET),
        (1800 + STATUS_TOLERANCE_KCAL, CalorieStatus.ON_TARGET),
        (1800 + STATUS_TOLERANCE_KCAL + 1, CalorieStatus.OVER),
    ],
)
def test_classify_uses_tolerance_band(total: int, expected: CalorieStatus):
    assert AggregationService.classify(total, 1800) == expected


def test_daily_progress_reads_current_goal(
    meal_repository: MealRepository, goal_store: GoalStore, aggregation: AggregationService
):
    meal_repository.add(KIMCHI_STEW, DAY)
    goal_store.set(900)

    progress = aggregation.daily_progress(DAY)

    assert progress.goal == 900
    assert progress.progress == pytest.approx(0.5)
    assert progress.status == CalorieStatus.UNDER
    assert progress.summary.total_calories == 450


def test_range_report_combines_window_and_totals(
    meal_repository: MealRepository, aggregation: AggregationService
):
    meal_repository.add(CHICKEN_BREAST, PREVIOUS_DAY)
    meal_repository.add(BIBIMBAP, DAY)

    report = aggregation.range_report(DAY, 2)

    assert len(report.summaries) == 2
    assert report.totals.calories == 500
    assert report.goal == 1800
    assert report.progress == pytest.approx(500 / 3600)
