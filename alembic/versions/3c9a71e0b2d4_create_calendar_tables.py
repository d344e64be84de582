"""create providers, clinic types, shifts and calendar notes

Revision ID: 3c9a71e0b2d4
Revises:
Create Date: 2026-03-19 15:36:50.246108

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9a71e0b2d4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(onupdate: bool = True):
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now())]
    if onupdate:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()))
    return cols


def upgrade():
    for table in ("providers", "clinic_types"):
        op.create_table(
            table,
            sa.Column("id", sa.String(length=64), primary_key=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("color", sa.String(length=16), nullable=False),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
            *_timestamps(),
        )

    pattern = sa.Enum("daily", "weekly", "biweekly", name="recurrence_pattern")
    op.create_table(
        "shifts",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("provider_id", sa.String(length=64), sa.ForeignKey("providers.id"), nullable=False),
        sa.Column("clinic_type_id", sa.String(length=64), sa.ForeignKey("clinic_types.id"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_vacation", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("recurrence_pattern", pattern, nullable=True),
        sa.Column("recurrence_end_date", sa.Date(), nullable=True),
        sa.Column("series_id", sa.String(length=64), nullable=True),
        sa.Column("series_index", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_shifts_provider_id", "shifts", ["provider_id"])
    op.create_index("ix_shifts_clinic_type_id", "shifts", ["clinic_type_id"])
    op.create_index("ix_shifts_series_id", "shifts", ["series_id"])
    op.create_index("ix_shifts_start_end", "shifts", ["start_date", "end_date"])
    op.create_index("ix_shifts_series_start", "shifts", ["series_id", "start_date"])

    op.create_table(
        "calendar_notes",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("period", sa.String(length=10), nullable=False, unique=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "calendar_comments",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("period", sa.String(length=10), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("author_id", sa.String(length=64), nullable=False),
        sa.Column("avatar_url", sa.String(length=512), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(onupdate=False),
    )
    op.create_index("ix_calendar_comments_period_created", "calendar_comments", ["period", "created_at"])


def downgrade():
    op.drop_index("ix_calendar_comments_period_created", table_name="calendar_comments")
    op.drop_table("calendar_comments")
    op.drop_table("calendar_notes")
    for name in ("ix_shifts_series_start", "ix_shifts_start_end", "ix_shifts_series_id",
                 "ix_shifts_clinic_type_id", "ix_shifts_provider_id"):
        op.drop_index(name, table_name="shifts")
    op.drop_table("shifts")
    sa.Enum(name="recurrence_pattern").drop(op.get_bind(), checkfirst=True)
    op.drop_table("clinic_types")
    op.drop_table("providers")
