"""Create users table."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("name", sa.Text()),
        sa.Column("email", sa.Text()),
        sa.Column("age", sa.Integer()),
    )


def downgrade() -> None:
    op.drop_table("users")
