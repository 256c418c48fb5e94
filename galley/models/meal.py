"""Meal and MealIngredient models."""

from sqlalchemy import Column, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from galley.database import Base
from galley.models.enums import Category, enum_values
from galley.models.mixins import TimestampMixin


class Meal(Base, TimestampMixin):
    """A dish the user cooks, with the ingredients it needs."""

    __tablename__ = "meals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    servings = Column(Integer, nullable=False, default=2)

    # Relationships
    user = relationship("User", backref="meals")
    ingredients = relationship(
        "MealIngredient",
        back_populates="meal",
        cascade="all, delete-orphan",
        order_by="MealIngredient.id",
    )
    planned_meals = relationship("PlannedMeal", back_populates="meal", cascade="all, delete")


class MealIngredient(Base, TimestampMixin):
    """Ingredient within a meal."""

    __tablename__ = "meal_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    meal_id = Column(
        Integer, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(200), nullable=False)
    category = Column(
        Enum(Category, name="category", values_callable=enum_values), nullable=False
    )
    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)

    # Relationships
    meal = relationship("Meal", back_populates="ingredients")
