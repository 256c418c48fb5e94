"""Identity matching, shortfall arithmetic and ingredient aggregation.

Everything here is pure: callers load rows from the database, pass them in
and persist whatever comes back. A stock-keeping unit is recognised by its
(name, category, unit) tuple, never by a surrogate id, and units are compared
verbatim ("2 kg" and "2000 g" are different things).

Two matching modes exist:

* exact: list-item dedup, purchase reconciliation, dashboard meal coverage
* name case-insensitive: matching meal ingredients against inventory
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from galley.models.enums import Category

IdentityKey = tuple[str, Category, str]


class Identified(Protocol):
    """Anything carrying the identity fields."""

    name: str
    category: Category
    unit: str


def identity_key(item: Identified) -> IdentityKey:
    """Exact identity key."""
    return (item.name, item.category, item.unit)


def inventory_match_key(item: Identified) -> IdentityKey:
    """Identity key with the name lowercased, for meal-to-inventory matching."""
    return (item.name.lower(), item.category, item.unit)


def same_identity(a: Identified, b: Identified, *, ignore_case: bool = False) -> bool:
    """Whether two references denote the same stock-keeping unit."""
    if ignore_case:
        return inventory_match_key(a) == inventory_match_key(b)
    return identity_key(a) == identity_key(b)


def round2(value: float) -> float:
    """Round to two decimal places."""
    return round(value, 2)


def shortfall(required: float, on_hand: float) -> float:
    """Positive gap between what is required and what is on hand."""
    return max(0.0, round2(required - on_hand))


def is_below_target(item: Any) -> bool:
    """Tracked items (target > 0) holding less than their target."""
    return item.target_quantity > 0 and item.quantity < item.target_quantity


def target_shortfall(item: Any) -> float:
    """Shortfall of an inventory item against its target; 0 when untracked."""
    if item.target_quantity <= 0:
        return 0.0
    return shortfall(item.target_quantity, item.quantity)


@dataclass
class AggregatedNeed:
    """Summed requirement for one identity across meals."""

    name: str
    category: Category
    unit: str
    quantity: float


def aggregate_ingredients(
    meals: Iterable[Any], *, ignore_case: bool = False
) -> dict[IdentityKey, AggregatedNeed]:
    """Sum ingredient quantities by identity across the given meals.

    With ``ignore_case`` names are grouped by the same key used to look up
    inventory, so each need is matched against on-hand stock exactly once.
    The first spelling seen names the need. A meal passed twice contributes
    twice. Insertion order follows the first occurrence of each identity.
    """
    key_of = inventory_match_key if ignore_case else identity_key
    aggregated: dict[IdentityKey, AggregatedNeed] = {}
    for meal in meals:
        for ingredient in meal.ingredients:
            key = key_of(ingredient)
            if key in aggregated:
                aggregated[key].quantity += ingredient.quantity
            else:
                aggregated[key] = AggregatedNeed(
                    name=ingredient.name,
                    category=ingredient.category,
                    unit=ingredient.unit,
                    quantity=ingredient.quantity,
                )
    return aggregated


def aggregate_plan(plan: Any, *, ignore_case: bool = False) -> dict[IdentityKey, AggregatedNeed]:
    """Aggregate the ingredients of every meal planned in a meal plan."""
    return aggregate_ingredients(
        (planned.meal for planned in plan.planned_meals), ignore_case=ignore_case
    )


class InventorySnapshot:
    """Point-in-time view of on-hand quantities for one user.

    Built once per operation so every emitted quantity is computed against
    the same reads.
    """

    def __init__(self, items: Iterable[Any]):
        self.items = list(items)
        self._exact: dict[IdentityKey, float] = {}
        self._folded: dict[IdentityKey, float] = {}
        for item in self.items:
            exact = identity_key(item)
            folded = inventory_match_key(item)
            self._exact[exact] = self._exact.get(exact, 0.0) + item.quantity
            self._folded[folded] = self._folded.get(folded, 0.0) + item.quantity

    def on_hand(self, item: Identified, *, ignore_case: bool = False) -> float:
        """Quantity on hand for an identity, summed over matching rows."""
        if ignore_case:
            return self._folded.get(inventory_match_key(item), 0.0)
        return self._exact.get(identity_key(item), 0.0)

    def shortfall_for(
        self, item: Identified, required: float, *, ignore_case: bool = False
    ) -> float:
        """Shortfall of ``required`` against what the snapshot holds."""
        return shortfall(required, self.on_hand(item, ignore_case=ignore_case))

    def covers(self, meal: Any) -> bool:
        """Whether every ingredient of a meal is on hand (exact identity).

        Meals without ingredients are never considered covered.
        """
        if not meal.ingredients:
            return False
        return all(self.on_hand(ing) >= ing.quantity for ing in meal.ingredients)
