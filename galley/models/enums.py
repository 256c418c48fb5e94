"""Enums for model fields."""

from enum import Enum


class Category(str, Enum):
    """Stock category shared by inventory, ingredients and list items."""

    FOOD = "FOOD"
    BEVERAGES = "BEVERAGES"
    CLEANING = "CLEANING"
    TOILETRIES = "TOILETRIES"
    DECK_SUPPLIES = "DECK_SUPPLIES"
    GALLEY = "GALLEY"
    SAFETY = "SAFETY"
    OTHER = "OTHER"


class ListStatus(str, Enum):
    """Provisioning list status. Users move lists between these freely."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class ItemType(str, Enum):
    """Origin of a provisioning list line."""

    RESTOCK = "restock"
    TRIP = "trip"


class MealSlot(str, Enum):
    """Time of day a planned meal occupies."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]
