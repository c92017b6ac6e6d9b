"""Create the properties table.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("location", sa.Text, nullable=False),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("price_per_month", sa.Float, nullable=False),
        sa.Column("rooms", sa.Float, nullable=False),
        sa.Column("bathrooms", sa.Float, nullable=False),
        sa.Column("square_meters", sa.Float, nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="available"),
        sa.Column("service_charge", sa.Float, nullable=True),
        sa.Column("cleaning_fee", sa.Float, nullable=True),
        sa.Column("commission_charge", sa.Float, nullable=True),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("is_favorite", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_approximated", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('available', 'contacted', 'talking', 'reserved', 'deleted')",
            name="ck_properties_status",
        ),
    )
    op.create_index("ix_properties_created_at", "properties", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_properties_created_at", table_name="properties")
    op.drop_table("properties")
