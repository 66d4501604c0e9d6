"""Analytics routes: daily summaries, rolling windows, macros and goal progress"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_aggregation_service, resolve_day
from domain.schemas.summary_schemas import (
    DailyProgress,
    DailySummary,
    MacroBreakdownResponse,
    RangeReport,
)
from services import AggregationService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/summary", response_model=DailySummary)
def daily_summary(
    day: Optional[date] = Query(None),
    service: AggregationService = Depends(get_aggregation_service),
):
    return service.summarize(resolve_day(day))


@router.get("/window", response_model=List[DailySummary])
def rolling_window(
    anchor: Optional[date] = Query(None, description="Last day of the window"),
    days: int = Query(7, ge=1, le=366),
    service: AggregationService = Depends(get_aggregation_service),
):
    """One summary per day ending at ``anchor``, oldest first"""
    return service.rolling_window(resolve_day(anchor), days)


@router.get("/macros", response_model=MacroBreakdownResponse)
def macro_breakdown(
    day: Optional[date] = Query(None),
    service: AggregationService = Depends(get_aggregation_service),
):
    target = resolve_day(day)
    breakdown = service.macro_breakdown(target)
    return MacroBreakdownResponse(
        date=target,
        carbs=breakdown.carbs,
        protein=breakdown.protein,
        fat=breakdown.fat,
        proportions=breakdown.proportions(),
    )


@router.get("/progress", response_model=DailyProgress)
def daily_progress(
    day: Optional[date] = Query(None),
    service: AggregationService = Depends(get_aggregation_service),
):
    """Unclamped progress of a day against the current goal"""
    return service.daily_progress(resolve_day(day))


@router.get("/range", response_model=RangeReport)
def range_report(
    anchor: Optional[date] = Query(None),
    days: int = Query(7, ge=1, le=366),
    service: AggregationService = Depends(get_aggregation_service),
):
    """Totals and bounded progress over the ``days`` ending at ``anchor``"""
    return service.range_report(resolve_day(anchor), days)


@router.get("/month", response_model=List[DailySummary])
def month_summaries(
    anchor: Optional[date] = Query(None, description="Any day in the month"),
    service: AggregationService = Depends(get_aggregation_service),
):
    return service.month_summaries(resolve_day(anchor))
