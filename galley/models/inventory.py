"""Inventory item model for on-hand stock."""

from sqlalchemy import Column, Date, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from galley.database import Base
from galley.models.enums import Category, enum_values
from galley.models.mixins import TimestampMixin


class InventoryItem(Base, TimestampMixin):
    """Something the user has on hand, optionally tracked against a target."""

    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    category = Column(
        Enum(Category, name="category", values_callable=enum_values), nullable=False
    )
    quantity = Column(Float, nullable=False, default=0)
    target_quantity = Column(Float, nullable=False, default=0)  # 0 = untracked
    unit = Column(String(50), nullable=False)
    expiry_date = Column(Date, nullable=True, index=True)
    reorder_threshold = Column(Float, nullable=False, default=0)  # legacy low-stock signal
    notes = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", backref="inventory_items")

    @property
    def is_below_target(self) -> bool:
        """Whether the item is tracked and under its target."""
        return self.target_quantity > 0 and self.quantity < self.target_quantity
