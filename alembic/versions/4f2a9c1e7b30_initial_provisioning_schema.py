"""Initial provisioning schema

Revision ID: 4f2a9c1e7b30
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1e7b30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CATEGORY = postgresql.ENUM(
    "FOOD",
    "BEVERAGES",
    "CLEANING",
    "TOILETRIES",
    "DECK_SUPPLIES",
    "GALLEY",
    "SAFETY",
    "OTHER",
    name="category",
    create_type=False,
)
LIST_STATUS = postgresql.ENUM(
    "DRAFT", "ACTIVE", "COMPLETED", "ARCHIVED", name="liststatus", create_type=False
)
ITEM_TYPE = postgresql.ENUM("restock", "trip", name="itemtype", create_type=False)
MEAL_SLOT = postgresql.ENUM("breakfast", "lunch", "dinner", name="mealslot", create_type=False)

ENUMS = [CATEGORY, LIST_STATUS, ITEM_TYPE, MEAL_SLOT]


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for enum in ENUMS:
        enum.create(bind, checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column(
            "has_seen_onboarding", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        *timestamps(),
    )

    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category", CATEGORY, nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("target_quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("unit", sa.String(50), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True, index=True),
        sa.Column("reorder_threshold", sa.Float(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "provisioning_lists",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", LIST_STATUS, nullable=False, server_default="DRAFT"),
        *timestamps(),
    )

    op.create_table(
        "provisioning_list_items",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "list_id",
            sa.Integer(),
            sa.ForeignKey("provisioning_lists.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category", CATEGORY, nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(50), nullable=False),
        sa.Column("item_type", ITEM_TYPE, nullable=False, server_default="trip"),
        sa.Column("purchased", sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
        sa.Column("purchased_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "meals",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("servings", sa.Integer(), nullable=False, server_default="2"),
        *timestamps(),
    )

    op.create_table(
        "meal_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "meal_id",
            sa.Integer(),
            sa.ForeignKey("meals.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category", CATEGORY, nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(50), nullable=False),
        *timestamps(),
    )

    op.create_table(
        "meal_plans",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *timestamps(),
    )

    op.create_table(
        "planned_meals",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "meal_plan_id",
            sa.Integer(),
            sa.ForeignKey("meal_plans.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "meal_id",
            sa.Integer(),
            sa.ForeignKey("meals.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("slot", MEAL_SLOT, nullable=False),
        *timestamps(),
    )


def downgrade() -> None:
    op.drop_table("planned_meals")
    op.drop_table("meal_plans")
    op.drop_table("meal_ingredients")
    op.drop_table("meals")
    op.drop_table("provisioning_list_items")
    op.drop_table("provisioning_lists")
    op.drop_table("inventory_items")
    op.drop_table("users")

    bind = op.get_bind()
    for enum in reversed(ENUMS):
        enum.drop(bind, checkfirst=True)
