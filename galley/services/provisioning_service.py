"""Provisioning list generation and purchase reconciliation."""

import csv
import io
import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from galley.config import Settings, get_settings
from galley.models.enums import ItemType, ListStatus
from galley.models.inventory import InventoryItem
from galley.models.meal import Meal
from galley.models.meal_plan import MealPlan
from galley.models.provisioning import ProvisioningList, ProvisioningListItem
from galley.models.user import User
from galley.services.reconciliation import (
    IdentityKey,
    InventorySnapshot,
    aggregate_ingredients,
    aggregate_plan,
    identity_key,
    target_shortfall,
)

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Name", "Category", "Quantity", "Unit", "Type", "Purchased", "Purchased At"]


class ProvisioningService:
    """Builds provisioning lists from shortfalls and folds purchases into inventory."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    # --- Lookups ---

    def get_list(self, list_id: int, user_id: int) -> ProvisioningList:
        """Get a list owned by the user, or 404."""
        lst = (
            self.db.query(ProvisioningList)
            .filter(ProvisioningList.id == list_id, ProvisioningList.user_id == user_id)
            .first()
        )
        if not lst:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="List not found")
        return lst

    def snapshot(self, user_id: int) -> InventorySnapshot:
        """Read the user's inventory once."""
        items = self.db.query(InventoryItem).filter(InventoryItem.user_id == user_id).all()
        return InventorySnapshot(items)

    # --- Generators ---

    def generate_restock_list(
        self, user_id: int, name: str | None = None
    ) -> ProvisioningList | None:
        """Create a DRAFT list from every inventory shortfall.

        Returns None when nothing is below target; no list is created then.
        """
        snapshot = self.snapshot(user_id)
        lines = [(item, amount) for item, amount in self._restock_lines(snapshot) if amount > 0]
        if not lines:
            logger.info(f"No inventory shortfalls for user {user_id}, nothing to generate")
            return None

        count = len(lines)
        lst = ProvisioningList(
            user_id=user_id,
            name=name or f"Restock - {date.today().isoformat()}",
            description=f"Auto-generated from {count} item{'' if count == 1 else 's'} below target",
            status=ListStatus.DRAFT,
        )
        self.db.add(lst)
        added = self._append_lines(lst, lines, ItemType.RESTOCK, set())
        self.db.commit()
        self.db.refresh(lst)

        logger.info(f"Generated restock list {lst.id} with {added} items for user {user_id}")
        return lst

    def add_restock_items(self, list_id: int, user_id: int) -> tuple[int, ProvisioningList]:
        """Add restock lines for current shortfalls to an existing list.

        Identities already on the list are skipped. Returns the number of
        lines actually added.
        """
        lst = self.get_list(list_id, user_id)
        snapshot = self.snapshot(user_id)

        existing = {identity_key(item) for item in lst.items}
        added = self._append_lines(lst, self._restock_lines(snapshot), ItemType.RESTOCK, existing)
        self.db.commit()
        self.db.refresh(lst)

        logger.info(f"Added {added} restock items to list {list_id}")
        return added, lst

    def add_meal_items(
        self, list_id: int, meal_id: int, user_id: int
    ) -> tuple[int, str, ProvisioningList]:
        """Add a meal's missing ingredients to an existing list as trip lines.

        Returns (added count, meal name, list).
        """
        lst = self.get_list(list_id, user_id)
        meal = self.db.query(Meal).filter(Meal.id == meal_id, Meal.user_id == user_id).first()
        if not meal:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found")

        snapshot = self.snapshot(user_id)
        needs = aggregate_ingredients([meal], ignore_case=True)
        lines = (
            (need, snapshot.shortfall_for(need, need.quantity, ignore_case=True))
            for need in needs.values()
        )

        existing = {identity_key(item) for item in lst.items}
        added = self._append_lines(lst, lines, ItemType.TRIP, existing)
        self.db.commit()
        self.db.refresh(lst)

        logger.info(f"Added {added} items from meal '{meal.name}' to list {list_id}")
        return added, meal.name, lst

    def generate_plan_list(self, plan_id: int, user_id: int) -> ProvisioningList | None:
        """Create a list covering what a meal plan needs beyond inventory.

        Returns None when the plan has no ingredients or nothing is short.
        """
        plan = (
            self.db.query(MealPlan)
            .filter(MealPlan.id == plan_id, MealPlan.user_id == user_id)
            .first()
        )
        if not plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan not found")

        needs = aggregate_plan(plan, ignore_case=True)
        if not needs:
            logger.info(f"Meal plan {plan_id} has no ingredients, nothing to generate")
            return None

        snapshot = self.snapshot(user_id)
        lines = [
            (need, amount)
            for need in needs.values()
            if (amount := snapshot.shortfall_for(need, need.quantity, ignore_case=True)) > 0
        ]
        if not lines:
            logger.info(f"Inventory covers meal plan {plan_id}, nothing to generate")
            return None

        lst = ProvisioningList(
            user_id=user_id,
            name=f"Meal Plan: {plan.name}",
            description=f'Generated from meal plan "{plan.name}"',
            status=ListStatus.DRAFT,
        )
        self.db.add(lst)
        added = self._append_lines(lst, lines, ItemType.TRIP, set())
        self.db.commit()
        self.db.refresh(lst)

        logger.info(f"Generated list {lst.id} with {added} items from meal plan {plan_id}")
        return lst

    # --- Purchase reconciliation ---

    def purchase_item(self, list_id: int, item_id: int, user_id: int) -> ProvisioningListItem:
        """Mark a line purchased and add its quantity to inventory.

        Runs as one transaction. The user row is locked first so concurrent
        purchases for the same user serialize, including the create branch
        where there is no inventory row to lock yet.
        """
        try:
            self.db.query(User).filter(User.id == user_id).with_for_update().one()

            item = (
                self.db.query(ProvisioningListItem)
                .join(ProvisioningList)
                .filter(
                    ProvisioningListItem.id == item_id,
                    ProvisioningListItem.list_id == list_id,
                    ProvisioningList.user_id == user_id,
                )
                .first()
            )
            if not item or item.purchased:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Item not found or already purchased",
                )

            item.purchased = True
            item.purchased_at = datetime.now(UTC)

            if self._syncs_to_inventory(item):
                self._fold_into_inventory(item, user_id)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(item)
        return item

    def _syncs_to_inventory(self, item: ProvisioningListItem) -> bool:
        if self.settings.purchase_sync_scope == "restock":
            return item.item_type == ItemType.RESTOCK
        return True

    def _fold_into_inventory(self, item: ProvisioningListItem, user_id: int) -> None:
        inventory = (
            self.db.query(InventoryItem)
            .filter(
                InventoryItem.user_id == user_id,
                InventoryItem.name == item.name,
                InventoryItem.category == item.category,
                InventoryItem.unit == item.unit,
            )
            .order_by(InventoryItem.id)
            .with_for_update()
            .first()
        )
        if inventory:
            inventory.quantity = inventory.quantity + item.quantity
            logger.info(
                f"Purchase of '{item.name}' raised inventory item {inventory.id} "
                f"to {inventory.quantity} {item.unit}"
            )
        else:
            self.db.add(
                InventoryItem(
                    user_id=user_id,
                    name=item.name,
                    category=item.category,
                    quantity=item.quantity,
                    target_quantity=0,
                    unit=item.unit,
                    reorder_threshold=0,
                )
            )
            logger.info(f"Purchase of '{item.name}' created a new inventory item")

    # --- Export ---

    def export_csv(self, list_id: int, user_id: int) -> str:
        """Render a list as CSV with every value double-quoted."""
        lst = self.get_list(list_id, user_id)

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for item in lst.items:
            writer.writerow(
                [
                    item.name,
                    item.category.value,
                    f"{item.quantity:g}",
                    item.unit,
                    item.item_type.value,
                    "Yes" if item.purchased else "No",
                    item.purchased_at.isoformat() if item.purchased_at else "",
                ]
            )
        return buffer.getvalue()

    # --- Helpers ---

    def _restock_lines(self, snapshot: InventorySnapshot) -> Iterable[tuple[InventoryItem, float]]:
        for item in snapshot.items:
            yield item, target_shortfall(item)

    def _append_lines(
        self,
        lst: ProvisioningList,
        lines: Iterable[tuple],
        item_type: ItemType,
        existing: set[IdentityKey],
    ) -> int:
        """Append lines with a positive quantity whose identity is not yet present."""
        added = 0
        for source, amount in lines:
            key = identity_key(source)
            if amount <= 0 or key in existing:
                continue
            lst.items.append(
                ProvisioningListItem(
                    name=source.name,
                    category=source.category,
                    quantity=amount,
                    unit=source.unit,
                    item_type=item_type,
                )
            )
            existing.add(key)
            added += 1
        return added
