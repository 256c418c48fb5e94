"""MealPlan and PlannedMeal models."""

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from galley.database import Base
from galley.models.enums import MealSlot, enum_values
from galley.models.mixins import TimestampMixin


class MealPlan(Base, TimestampMixin):
    """A named date range that meals are scheduled into."""

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    # Relationships
    user = relationship("User", backref="meal_plans")
    planned_meals = relationship(
        "PlannedMeal",
        back_populates="meal_plan",
        cascade="all, delete-orphan",
        order_by=lambda: [PlannedMeal.date, PlannedMeal.slot, PlannedMeal.id],
    )


class PlannedMeal(Base, TimestampMixin):
    """One meal assigned to a date and slot. Slots may hold several meals."""

    __tablename__ = "planned_meals"

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_id = Column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    meal_id = Column(
        Integer, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False)
    slot = Column(Enum(MealSlot, name="mealslot", values_callable=enum_values), nullable=False)

    # Relationships
    meal_plan = relationship("MealPlan", back_populates="planned_meals")
    meal = relationship("Meal", back_populates="planned_meals")
