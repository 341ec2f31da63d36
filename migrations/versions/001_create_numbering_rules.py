"""Create numbering_rules table.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "numbering_rules",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(length=30), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("prefix", sa.String(length=10), nullable=False),
        # Free text: unknown formats / periods degrade to "no date" / "never reset"
        sa.Column("date_format", sa.String(length=20), nullable=True),
        sa.Column("reset_period", sa.String(length=20), nullable=True),
        sa.Column("sequence_length", sa.Integer(), nullable=False, server_default="4"),
        sa.Column("current_sequence", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_reset_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("current_sequence >= 0", name="ck_numbering_rules_current_sequence_non_negative"),
    )
    op.create_index("ix_numbering_rules_code", "numbering_rules", ["code"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_numbering_rules_code", table_name="numbering_rules")
    op.drop_table("numbering_rules")
