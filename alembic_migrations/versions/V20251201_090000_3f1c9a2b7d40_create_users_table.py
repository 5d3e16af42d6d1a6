"""create_users_table

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2025-12-01 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c9a2b7d40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "username",
            sa.String(length=30),
            nullable=False,
            comment="Public account name",
        ),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="Login identifier, stored lowercase",
        ),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column(
            "weekly_goal",
            sa.Numeric(precision=10, scale=2),
            nullable=False,
            comment="Weekly CO2e budget in kg",
        ),
        sa.Column("last_active", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )


def downgrade() -> None:
    op.drop_table("users")
