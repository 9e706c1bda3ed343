"""calculation history table

Revision ID: 0001
Revises:
Create Date: 2025-03-01 00:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "calculation_history",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("record", sa.Text(), nullable=False),
        sa.Column("result", sa.Text(), nullable=False),
        sa.Column("ruleset_version", sa.String(), nullable=True),
        sa.Column("app_version", sa.String(), nullable=True),
        sa.Column("schema_version", sa.String(), nullable=True),
    )
    op.create_index("ix_calculation_history_id", "calculation_history", ["id"], unique=True)
    op.create_index("ix_calculation_history_created_at", "calculation_history", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_calculation_history_id", table_name="calculation_history")
    op.drop_index("ix_calculation_history_created_at", table_name="calculation_history")
    op.drop_table("calculation_history")
