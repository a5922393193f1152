"""create licitations table

Revision ID: 8b4e7d0c2a16
Revises: 5f2c1a9d3e71
Create Date: 2025-03-02

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b4e7d0c2a16"
down_revision: str | None = "5f2c1a9d3e71"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "licitations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_lowest_price", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
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
        sa.CheckConstraint("end_date > start_date", name="ck_licitations_dates"),
    )
    op.create_index("ix_licitations_id", "licitations", ["id"])
    op.create_index("ix_licitations_user_id", "licitations", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_licitations_user_id", table_name="licitations")
    op.drop_index("ix_licitations_id", table_name="licitations")
    op.drop_table("licitations")
