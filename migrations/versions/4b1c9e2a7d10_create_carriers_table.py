"""create carriers table

Revision ID: 4b1c9e2a7d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "4b1c9e2a7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "carriers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("types", postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column("lanes", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("logo_emoji", sa.String(length=16), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_carriers_types", "carriers", ["types"], unique=False, postgresql_using="gin")
    op.create_index(
        "idx_carriers_lanes",
        "carriers",
        ["lanes"],
        unique=False,
        postgresql_using="gin",
        postgresql_ops={"lanes": "jsonb_path_ops"},
    )
    op.create_index("idx_carriers_verified", "carriers", ["verified"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_carriers_verified", table_name="carriers")
    op.drop_index("idx_carriers_lanes", table_name="carriers")
    op.drop_index("idx_carriers_types", table_name="carriers")
    op.drop_table("carriers")
