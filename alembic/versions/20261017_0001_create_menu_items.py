"""create menu_items table

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "menu_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "owner_id",
            sa.String(length=64),
            nullable=False,
            comment="Opaque vendor identifier attached at validation time",
        ),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("currency", sa.String(length=8), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "owner_id",
            "category",
            "name",
            "price",
            name="uq_menu_items_owner_category_name_price",
        ),
    )
    op.create_index("ix_menu_items_owner_category", "menu_items", ["owner_id", "category"], unique=False)
    op.create_index("ix_menu_items_owner_available", "menu_items", ["owner_id", "is_available"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_menu_items_owner_available", table_name="menu_items")
    op.drop_index("ix_menu_items_owner_category", table_name="menu_items")
    op.drop_table("menu_items")
