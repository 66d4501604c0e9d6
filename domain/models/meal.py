"""
Meal ledger models.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    DateTime,
    TIMESTAMP,
    CheckConstraint,
    Index,
    Uuid,
)
from sqlalchemy.sql import func
from datetime import datetime, timezone
import uuid

from domain.models.database import Base


class MealRecord(Base):
    """A single recorded eating event.

    ``eaten_at`` always holds the naive local start of the day the meal
    belongs to.
    """

    __tablename__ = "meal"

    meal_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    calories = Column(Integer, nullable=False, default=0)
    carbs = Column(Integer, nullable=False, default=0)
    protein = Column(Integer, nullable=False, default=0)
    fat = Column(Integer, nullable=False, default=0)
    eaten_at = Column(DateTime, nullable=False)
    is_favorite = Column(Boolean, nullable=False, default=False)
    # Set client-side with microseconds; orders meals recorded on the same day
    created_at = Column(
        TIMESTAMP(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("calories >= 0", name="ck_meal_calories_nonneg"),
        CheckConstraint("carbs >= 0", name="ck_meal_carbs_nonneg"),
        CheckConstraint("protein >= 0", name="ck_meal_protein_nonneg"),
        CheckConstraint("fat >= 0", name="ck_meal_fat_nonneg"),
        Index("ix_meal_eaten_at", "eaten_at"),
        Index("ix_meal_favorite_name", "is_favorite", "name"),
    )

    def __repr__(self) -> str:
        return (
            f"<MealRecord {self.meal_id} name={self.name!r} "
            f"calories={self.calories} eaten_at={self.eaten_at}>"
        )


class AppSetting(Base):
    """Process-wide scalar settings (daily calorie goal)"""

    __tablename__ = "app_setting"

    key = Column(Text, primary_key=True)
    int_value = Column(Integer)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )
