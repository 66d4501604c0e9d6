"""
Goal Store - persisted daily calorie goal with a default fallback
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import StoreError
from domain.enums import GoalType
from domain.models import AppSetting
from repositories.base import BaseRepository

logger = logging.getLogger("mealledger.repository.goal")

DAILY_CALORIE_GOAL_KEY = "daily_calorie_goal"


class GoalStore(BaseRepository[AppSetting]):
    """
    Daily calorie goal shared by every ledger caller.

    ``get`` never fails: an unset goal, a stored zero or an unreadable store
    all yield the default. ``set`` ignores values <= 0.
    """

    def __init__(self, db: Session, default_goal: Optional[int] = None):
        super().__init__(db, AppSetting, "key")
        self.default_goal = default_goal or settings.default_calorie_goal

    def get(self) -> int:
        try:
            record = self.get_by_id(DAILY_CALORIE_GOAL_KEY)
        except StoreError:
            self.db.rollback()
            logger.warning("Could not read calorie goal; using default %d", self.default_goal)
            return self.default_goal
        if record is None or not record.int_value:
            return self.default_goal
        return record.int_value

    def set(self, value: int) -> None:
        if value <= 0:
            logger.debug("Ignoring non-positive calorie goal %s", value)
            return
        with self.transaction("set calorie goal"):
            record = self.get_by_id(DAILY_CALORIE_GOAL_KEY)
            if record is None:
                self.store.insert(AppSetting(key=DAILY_CALORIE_GOAL_KEY, int_value=value))
            else:
                self.store.update(DAILY_CALORIE_GOAL_KEY, {"int_value": value})
        logger.info("calorie_goal_set value=%d", value)

    def apply_preset(self, goal_type: GoalType) -> int:
        """Store the target of a goal preset and return it"""
        target = goal_type.target_calories
        self.set(target)
        return target

    def preset(self) -> Optional[GoalType]:
        """The preset matching the current goal, if any"""
        current = self.get()
        for goal_type in GoalType:
            if goal_type.target_calories == current:
                return goal_type
        return None
