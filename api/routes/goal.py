"""Daily calorie goal routes"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_goal_store
from domain.enums import GoalType
from domain.schemas.summary_schemas import GoalResponse, GoalUpdate
from repositories import GoalStore

router = APIRouter(prefix="/goal", tags=["Goal"])
logger = logging.getLogger("mealledger.api.goal")


def _goal_response(goal_store: GoalStore) -> GoalResponse:
    return GoalResponse(daily_calorie_goal=goal_store.get(), preset=goal_store.preset())


@router.get("", response_model=GoalResponse)
def get_goal(goal_store: GoalStore = Depends(get_goal_store)):
    return _goal_response(goal_store)


@router.put("", response_model=GoalResponse)
def set_goal(update: GoalUpdate, goal_store: GoalStore = Depends(get_goal_store)):
    """Set the daily goal; values <= 0 are ignored and the current goal is returned"""
    goal_store.set(update.daily_calorie_goal)
    return _goal_response(goal_store)


@router.put("/preset/{goal_type}", response_model=GoalResponse)
def apply_goal_preset(goal_type: GoalType, goal_store: GoalStore = Depends(get_goal_store)):
    target = goal_store.apply_preset(goal_type)
    logger.info(f"Applied goal preset {goal_type.value} ({target} kcal)")
    return _goal_response(goal_store)
