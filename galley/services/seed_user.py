"""Demo data for new accounts, and its removal."""

import logging
from datetime import UTC, date, datetime

from sqlalchemy.orm import Session

from galley.models.enums import Category, ListStatus
from galley.models.inventory import InventoryItem
from galley.models.provisioning import ProvisioningList, ProvisioningListItem

logger = logging.getLogger(__name__)

F, B, C, T = Category.FOOD, Category.BEVERAGES, Category.CLEANING, Category.TOILETRIES
D, G, S = Category.DECK_SUPPLIES, Category.GALLEY, Category.SAFETY

# (name, category, quantity, target, unit, expiry)
DEMO_INVENTORY = [
    ("Olive Oil", F, 3, 4, "bottles", date(2026, 6, 15)),
    ("Fresh Salmon", F, 2, 3, "kg", date(2026, 2, 18)),
    ("Prosecco", B, 12, 12, "bottles", None),
    ("Still Water", B, 24, 48, "bottles", None),
    ("All-Purpose Cleaner", C, 2, 3, "bottles", None),
    ("Deck Soap", C, 1, 2, "bottles", None),
    ("Hand Towels", T, 20, 20, "pcs", None),
    ("Sunscreen SPF50", T, 4, 6, "bottles", None),
    ("Dock Lines", D, 6, 6, "pcs", None),
    ("Fenders", D, 8, 8, "pcs", None),
    ("Chef Knife Set", G, 1, 0, "pcs", None),
    ("Cutting Boards", G, 3, 0, "pcs", None),
    ("First Aid Kit", S, 2, 2, "pcs", None),
    ("Flares", S, 6, 6, "pcs", None),
    ("Lemons", F, 5, 10, "pcs", date(2026, 2, 20)),
    ("Butter", F, 1, 2, "kg", date(2026, 3, 1)),
]

DEMO_LISTS = [
    (
        "Weekly Galley Restock",
        "Regular weekly provisions for the galley",
        ListStatus.ACTIVE,
        [
            ("Fresh Bread", F, 4, "loaves", False),
            ("Eggs", F, 3, "dozen", False),
            ("Milk", B, 6, "L", True),
            ("Orange Juice", B, 4, "L", False),
            ("Paper Towels", C, 6, "rolls", True),
        ],
    ),
    (
        "Guest Charter Prep",
        "Provisions for upcoming 7-day charter with 8 guests",
        ListStatus.DRAFT,
        [
            ("Champagne", B, 6, "bottles", False),
            ("Wagyu Steak", F, 4, "kg", False),
            ("Lobster Tails", F, 16, "pcs", False),
            ("Premium Gin", B, 2, "bottles", False),
            ("Guest Amenity Kits", T, 8, "pcs", False),
            ("Pool Towels", D, 16, "pcs", False),
        ],
    ),
]


def seed_new_user(db: Session, user_id: int) -> None:
    """Add demo inventory and lists for a user. Caller commits."""
    for name, category, quantity, target, unit, expiry in DEMO_INVENTORY:
        db.add(
            InventoryItem(
                user_id=user_id,
                name=name,
                category=category,
                quantity=quantity,
                target_quantity=target,
                unit=unit,
                expiry_date=expiry,
                reorder_threshold=0,
            )
        )

    now = datetime.now(UTC)
    for name, description, list_status, items in DEMO_LISTS:
        lst = ProvisioningList(
            user_id=user_id, name=name, description=description, status=list_status
        )
        for item_name, category, quantity, unit, purchased in items:
            lst.items.append(
                ProvisioningListItem(
                    name=item_name,
                    category=category,
                    quantity=quantity,
                    unit=unit,
                    purchased=purchased,
                    purchased_at=now if purchased else None,
                )
            )
        db.add(lst)

    db.flush()
    logger.info(f"Seeded demo data for user {user_id}")


def clear_seed_data(db: Session, user_id: int) -> None:
    """Delete a user's lists, list items and inventory."""
    list_ids = db.query(ProvisioningList.id).filter(ProvisioningList.user_id == user_id)
    db.query(ProvisioningListItem).filter(ProvisioningListItem.list_id.in_(list_ids)).delete(
        synchronize_session=False
    )
    db.query(ProvisioningList).filter(ProvisioningList.user_id == user_id).delete(
        synchronize_session=False
    )
    db.query(InventoryItem).filter(InventoryItem.user_id == user_id).delete(
        synchronize_session=False
    )
    db.commit()
    logger.info(f"Cleared provisioning data for user {user_id}")
