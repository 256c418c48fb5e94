"""Provisioning list and list item models."""

from sqlalchemy import Boolean, Column, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from galley.database import Base
from galley.models.enums import Category, ItemType, ListStatus, enum_values
from galley.models.mixins import TimestampMixin


class ProvisioningList(Base, TimestampMixin):
    """Shopping list of purchasable lines."""

    __tablename__ = "provisioning_lists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(ListStatus, name="liststatus", values_callable=enum_values),
        nullable=False,
        default=ListStatus.DRAFT,
    )

    # Relationships
    user = relationship("User", backref="provisioning_lists")
    items = relationship(
        "ProvisioningListItem",
        back_populates="list",
        cascade="all, delete-orphan",
        order_by="ProvisioningListItem.id",
    )


class ProvisioningListItem(Base, TimestampMixin):
    """A line on a provisioning list."""

    __tablename__ = "provisioning_list_items"

    id = Column(Integer, primary_key=True, index=True)
    list_id = Column(
        Integer,
        ForeignKey("provisioning_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(200), nullable=False)
    category = Column(
        Enum(Category, name="category", values_callable=enum_values), nullable=False
    )
    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)
    item_type = Column(
        Enum(ItemType, name="itemtype", values_callable=enum_values),
        nullable=False,
        default=ItemType.TRIP,
    )
    purchased = Column(Boolean, nullable=False, default=False, index=True)
    purchased_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    list = relationship("ProvisioningList", back_populates="items")
