"""create_emissions_table

Revision ID: 8b2e4d6f1a93
Revises: 3f1c9a2b7d40
Create Date: 2025-12-01 09:05:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8b2e4d6f1a93"
down_revision = "3f1c9a2b7d40"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "emissions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "user_id", sa.Uuid(), nullable=False, comment="Owner of the record"
        ),
        sa.Column(
            "category",
            sa.String(length=50),
            nullable=False,
            comment="transportation, energy, diet, shopping or waste",
        ),
        sa.Column(
            "activity",
            sa.String(length=100),
            nullable=False,
            comment="Activity key within the category (e.g. car, electricity, beef)",
        ),
        sa.Column(
            "amount",
            sa.Numeric(precision=12, scale=4),
            nullable=False,
            comment="Quantity in the category's unit (km, kWh, kg, items)",
        ),
        sa.Column(
            "unit",
            sa.String(length=50),
            nullable=False,
            comment="Descriptive unit label, not used in calculation",
        ),
        sa.Column(
            "passengers",
            sa.Integer(),
            nullable=False,
            comment="People sharing a transportation trip",
        ),
        sa.Column(
            "co2e",
            sa.Numeric(precision=24, scale=10),
            nullable=False,
            comment="Calculated CO2e in kg",
        ),
        sa.Column(
            "date",
            sa.DateTime(),
            nullable=False,
            comment="When the activity occurred",
        ),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        comment="Logged activities with their calculated CO2e",
    )
    op.create_index(
        "ix_emissions_user_date", "emissions", ["user_id", "date"], unique=False
    )
    op.create_index(
        "ix_emissions_user_category",
        "emissions",
        ["user_id", "category"],
        unique=False,
    )
    op.create_index(
        "ix_emissions_user_created",
        "emissions",
        ["user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_emissions_user_created", table_name="emissions")
    op.drop_index("ix_emissions_user_category", table_name="emissions")
    op.drop_index("ix_emissions_user_date", table_name="emissions")
    op.drop_table("emissions")
