"""Initial schema: inventory, recipes, shopping list, preferences

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- inventory_items ---
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String, nullable=False, index=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("unit", sa.String, nullable=False),
        sa.Column("category", sa.String, nullable=False, index=True),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("added_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- recipes ---
    op.create_table(
        "recipes",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("ingredients", sa.Text, nullable=False),
        sa.Column("instructions", sa.Text, nullable=False),
        sa.Column("prep_time", sa.Integer, nullable=False),
        sa.Column("cook_time", sa.Integer, nullable=False),
        sa.Column("servings", sa.Integer, nullable=False),
        sa.Column("calories", sa.Integer, nullable=False),
        sa.Column("category", sa.String, nullable=False, index=True),
        sa.Column("cuisine", sa.String, nullable=False, server_default="Unknown"),
        sa.Column("source", sa.String, nullable=False),
        sa.Column("is_saved", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- shopping_list_items ---
    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String, nullable=False, index=True),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("unit", sa.String, nullable=False),
        sa.Column("category", sa.String, nullable=False),
        sa.Column("purchased", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("expiry_date", sa.DateTime(timezone=True)),
    )

    # --- user_preferences ---
    op.create_table(
        "user_preferences",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.String, nullable=False, unique=True, server_default="default-user"),
        sa.Column("dietary_restrictions", sa.Text, nullable=False, server_default="[]"),
        sa.Column("allergies", sa.Text, nullable=False, server_default="[]"),
        sa.Column("favorite_cuisines", sa.Text, nullable=False, server_default="[]"),
        sa.Column("disliked_ingredients", sa.Text, nullable=False, server_default="[]"),
        sa.Column("servings_default", sa.Integer, nullable=False, server_default="4"),
        sa.Column("shopping_day", sa.String, nullable=False, server_default="Sunday"),
        sa.Column("low_stock_threshold", sa.Integer, nullable=False, server_default="20"),
        sa.Column("expiry_warning_days", sa.Integer, nullable=False, server_default="3"),
        sa.Column("expiry_alerts", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("low_stock_alerts", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("shopping_reminders", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("recipe_suggestions", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("user_preferences")
    op.drop_table("shopping_list_items")
    op.drop_table("recipes")
    op.drop_table("inventory_items")
