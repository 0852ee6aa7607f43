"""create prices table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "prices",
        sa.Column(
            "id",
            sa.String(length=255),
            nullable=False,
            comment="Client-supplied natural key; duplicates are ignored on insert",
        ),
        sa.Column("created_at", sa.Date(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_prices_category", "prices", ["category"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_prices_category", table_name="prices")
    op.drop_table("prices")
