"""Inventory queries and dashboard rollups."""

import logging
import math
from datetime import date, timedelta
from typing import Any

from sqlalchemy.orm import Session, selectinload

from galley.config import Settings, get_settings
from galley.models.enums import ListStatus
from galley.models.inventory import InventoryItem
from galley.models.meal import Meal
from galley.models.provisioning import ProvisioningList
from galley.schemas.inventory import INVENTORY_SORT_FIELDS, InventoryQuery
from galley.services.reconciliation import (
    InventorySnapshot,
    is_below_target,
    round2,
    target_shortfall,
)

logger = logging.getLogger(__name__)

EXPIRING_SOON_LIMIT = 10
RECENT_LISTS_LIMIT = 5


class InventoryService:
    """Read-side operations over a user's inventory."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def list_items(self, user_id: int, query: InventoryQuery) -> dict[str, Any]:
        """Filtered, sorted, paginated inventory listing."""
        q = self.db.query(InventoryItem).filter(InventoryItem.user_id == user_id)
        if query.search:
            q = q.filter(InventoryItem.name.ilike(f"%{query.search}%"))
        if query.category:
            q = q.filter(InventoryItem.category == query.category)

        total = q.count()

        sort_field = query.sort if query.sort in INVENTORY_SORT_FIELDS else "name"
        column = getattr(InventoryItem, sort_field)
        ordering = column.desc() if query.order == "desc" else column.asc()
        items = (
            q.order_by(ordering, InventoryItem.id)
            .offset((query.page - 1) * query.page_size)
            .limit(query.page_size)
            .all()
        )

        return {
            "data": items,
            "total": total,
            "page": query.page,
            "page_size": query.page_size,
            "total_pages": math.ceil(total / query.page_size),
        }

    def low_stock(self, user_id: int) -> list[InventoryItem]:
        """Items tracked against a target and currently under it."""
        items = (
            self.db.query(InventoryItem)
            .filter(InventoryItem.user_id == user_id, InventoryItem.target_quantity > 0)
            .order_by(InventoryItem.name)
            .all()
        )
        return [item for item in items if is_below_target(item)]

    def dashboard_stats(self, user_id: int) -> dict[str, Any]:
        """Summary counts for the dashboard. Recomputed on every call."""
        all_items = self.db.query(InventoryItem).filter(InventoryItem.user_id == user_id).all()
        snapshot = InventorySnapshot(all_items)

        # Inventory status: % of targeted items at or above target
        targeted = [item for item in all_items if item.target_quantity > 0]
        stocked = [item for item in targeted if item.quantity >= item.target_quantity]
        inventory_pct = round(len(stocked) / len(targeted) * 100) if targeted else 100

        low_stock_items = sorted(
            (item for item in targeted if is_below_target(item)), key=lambda i: i.name
        )
        items_needed = round2(sum(target_shortfall(item) for item in low_stock_items))

        today = date.today()
        horizon = today + timedelta(days=self.settings.expiry_lookahead_days)
        expiring_soon = (
            self.db.query(InventoryItem)
            .filter(
                InventoryItem.user_id == user_id,
                InventoryItem.expiry_date.is_not(None),
                InventoryItem.expiry_date >= today,
                InventoryItem.expiry_date <= horizon,
            )
            .order_by(InventoryItem.expiry_date.asc())
            .limit(EXPIRING_SOON_LIMIT)
            .all()
        )

        active_lists = (
            self.db.query(ProvisioningList)
            .filter(
                ProvisioningList.user_id == user_id,
                ProvisioningList.status == ListStatus.ACTIVE,
            )
            .count()
        )
        recent_lists = (
            self.db.query(ProvisioningList)
            .options(selectinload(ProvisioningList.items))
            .filter(ProvisioningList.user_id == user_id)
            .order_by(ProvisioningList.updated_at.desc(), ProvisioningList.id.desc())
            .limit(RECENT_LISTS_LIMIT)
            .all()
        )

        meals = (
            self.db.query(Meal)
            .options(selectinload(Meal.ingredients))
            .filter(Meal.user_id == user_id)
            .all()
        )
        meals_stocked = sum(1 for meal in meals if snapshot.covers(meal))

        return {
            "total_items": len(all_items),
            "inventory_pct": inventory_pct,
            "low_stock_count": len(low_stock_items),
            "items_needed": items_needed,
            "low_stock_items": low_stock_items,
            "expiring_soon": expiring_soon,
            "active_lists": active_lists,
            "meals_stocked": meals_stocked,
            "total_meals": len(meals),
            "recent_lists": recent_lists,
        }
