"""create listings table

Revision ID: 8b4e2d6a9c31
Revises: 3f1c9a7d2b10
Create Date: 2026-10-19 09:31:07.104559

Creates the listings table for vehicles owned by approved Saccos. Uses a
RESTRICT FK so a tenant cannot be removed while it still owns vehicles.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8b4e2d6a9c31"
down_revision: Union[str, Sequence[str], None] = "3f1c9a7d2b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create listings table.

    Key constraints:
    - plate_number unique across all tenants (stored normalized)
    - tenant_id FK with RESTRICT
    """
    op.create_table(
        "listings",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("tenant_id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("plate_number", sa.String(32), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("features", sa.JSON(), nullable=False),
        sa.Column("primary_image", sa.Text(), nullable=False),
        sa.Column("exterior_images", sa.JSON(), nullable=False),
        sa.Column("interior_images", sa.JSON(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_listings"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_listings_tenant_id_tenants",
            ondelete="RESTRICT",
        ),
        sa.UniqueConstraint("plate_number", name="uq_listings_plate_number"),
    )

    op.create_index("ix_listings_tenant_id", "listings", ["tenant_id"])


def downgrade() -> None:
    op.drop_index("ix_listings_tenant_id", table_name="listings")
    op.drop_table("listings")
