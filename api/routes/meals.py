"""Meal ledger routes: record, edit, delete, browse and search meals"""

from datetime import date
from typing import List, Optional
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import (
    get_favorites_service,
    get_meal_service,
    resolve_day,
)
from domain.mappers.meal_mapper import MealMapper
from domain.schemas.meal_schemas import (
    DayViewResponse,
    MealCreate,
    MealIdsRequest,
    MealResponse,
    MealUpdate,
)
from services import FavoritesService, MealService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("mealledger.api.meals")


@router.post("", response_model=DayViewResponse, status_code=status.HTTP_201_CREATED)
def add_meal(
    meal: MealCreate,
    day: Optional[date] = Query(None, description="Day eaten (defaults to today)"),
    service: MealService = Depends(get_meal_service),
):
    """
    Record a meal on a day.

    The response is the recomputed view of that day: its meals, totals,
    the current goal, progress and status.
    """
    return service.add_meal(meal, resolve_day(day))


@router.get("", response_model=DayViewResponse)
def get_day(
    day: Optional[date] = Query(None, description="Day to show (defaults to today)"),
    service: MealService = Depends(get_meal_service),
):
    return service.day_view(resolve_day(day))


@router.get("/all", response_model=List[MealResponse])
def list_all_meals(service: MealService = Depends(get_meal_service)):
    """Every recorded meal, most recent first"""
    return [MealMapper.to_response(m) for m in service.all_meals()]


@router.get("/search", response_model=List[MealResponse])
def search_meals(
    q: str = Query("", description="Case-insensitive name fragment"),
    service: MealService = Depends(get_meal_service),
):
    """Meals whose name contains ``q``; a blank query lists every meal"""
    return [MealMapper.to_response(m) for m in service.search(q)]


@router.post("/bulk-delete")
def bulk_delete_meals(
    request: MealIdsRequest,
    service: MealService = Depends(get_meal_service),
):
    deleted = service.delete_meals(request.ids)
    logger.info(f"Bulk deleted {deleted} meals")
    return {"deleted": deleted}


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(meal_id: UUID, service: MealService = Depends(get_meal_service)):
    return MealMapper.to_response(service.get_meal(meal_id))


@router.patch("/{meal_id}", response_model=DayViewResponse)
def update_meal(
    meal_id: UUID,
    patch: MealUpdate,
    service: MealService = Depends(get_meal_service),
):
    """Edit a meal and return the view of the day it is on afterwards"""
    return service.update_meal(meal_id, patch)


@router.delete("/{meal_id}", response_model=DayViewResponse)
def delete_meal(meal_id: UUID, service: MealService = Depends(get_meal_service)):
    return service.delete_meal(meal_id)


@router.post(
    "/{meal_id}/copy-to-today",
    response_model=MealResponse,
    status_code=status.HTTP_201_CREATED,
)
def copy_meal_to_today(
    meal_id: UUID,
    favorites: FavoritesService = Depends(get_favorites_service),
):
    """Duplicate a meal from any day into today"""
    return MealMapper.to_response(favorites.copy_to_today(meal_id))
