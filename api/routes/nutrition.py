"""Nutrition lookup route - pre-fills an add-meal form, never writes to the ledger"""

from fastapi import APIRouter, Depends

from adapters.nutrition_adapter import NutritionLookupAdapter
from api.dependencies import get_nutrition_adapter
from domain.schemas.nutrition_schemas import NutritionEstimate, NutritionLookupRequest

router = APIRouter(prefix="/nutrition", tags=["Nutrition"])


@router.post("/lookup", response_model=NutritionEstimate)
async def lookup_nutrition(
    request: NutritionLookupRequest,
    adapter: NutritionLookupAdapter = Depends(get_nutrition_adapter),
):
    """
    Estimate calories, carbs, protein and fat for a food name.

    An unrecognised food comes back as all zeros with status 200. Missing
    credentials, transport failures and undecodable replies are reported
    through the error envelope.
    """
    return await adapter.lookup(request.food_name.strip())
