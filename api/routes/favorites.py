"""Favorite meal routes"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_favorites_service, resolve_day
from domain.mappers.meal_mapper import MealMapper
from domain.schemas.meal_schemas import MealIdsRequest, MealResponse
from services import FavoritesService

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get("", response_model=List[MealResponse])
def list_favorites(service: FavoritesService = Depends(get_favorites_service)):
    """Favorites by name, most recent first within a name"""
    return [MealMapper.to_response(m) for m in service.favorites()]


@router.post("/bulk-remove", response_model=List[MealResponse])
def bulk_remove_favorites(
    request: MealIdsRequest,
    service: FavoritesService = Depends(get_favorites_service),
):
    """Unset the favorite flag on a batch; all or nothing"""
    return [MealMapper.to_response(m) for m in service.bulk_remove_favorite(request.ids)]


@router.post("/{meal_id}", response_model=MealResponse)
def promote_favorite(
    meal_id: UUID, service: FavoritesService = Depends(get_favorites_service)
):
    return MealMapper.to_response(service.promote(meal_id))


@router.delete("/{meal_id}", response_model=MealResponse)
def demote_favorite(
    meal_id: UUID, service: FavoritesService = Depends(get_favorites_service)
):
    return MealMapper.to_response(service.demote(meal_id))


@router.post("/{meal_id}/toggle", response_model=MealResponse)
def toggle_favorite(
    meal_id: UUID, service: FavoritesService = Depends(get_favorites_service)
):
    return MealMapper.to_response(service.toggle(meal_id))


@router.post(
    "/{meal_id}/add", response_model=MealResponse, status_code=status.HTTP_201_CREATED
)
def add_from_favorite(
    meal_id: UUID,
    day: Optional[date] = Query(None, description="Target day (defaults to today)"),
    service: FavoritesService = Depends(get_favorites_service),
):
    """Record a new meal on ``day`` from a favorite template"""
    return MealMapper.to_response(service.add_from_favorite(meal_id, resolve_day(day)))
